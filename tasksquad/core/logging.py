"""
Logging configuration for Task Squad.
"""
from __future__ import annotations

import logging
import sys

from tasksquad.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger with a single stderr handler.

    Call this once, early, from the composition root. Repeated calls replace
    the previous handler instead of stacking duplicates.
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # SQL echo is only wanted while debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
    logging.captureWarnings(True)
