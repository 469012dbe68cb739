"""
Notification sinks for user-visible store outcomes.
Both sinks are fire-and-forget: notify() never raises and returns nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from tasksquad.core.ports import ToastVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Toast:
    title: str
    description: str
    variant: ToastVariant = ToastVariant.DEFAULT
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_destructive(self) -> bool:
        return self.variant is ToastVariant.DESTRUCTIVE


class LoggingNotificationSink:
    """Writes each toast to the log; destructive ones at WARNING."""

    def notify(
        self,
        title: str,
        description: str,
        *,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> None:
        level = logging.WARNING if variant is ToastVariant.DESTRUCTIVE else logging.INFO
        logger.log(level, "%s: %s", title, description)


@dataclass
class CollectingNotificationSink:
    """
    Keeps every toast in arrival order for a view to drain.
    Also logs through LoggingNotificationSink so nothing is lost if no view
    ever reads the queue.
    """

    toasts: list[Toast] = field(default_factory=list)
    _log: LoggingNotificationSink = field(default_factory=LoggingNotificationSink, repr=False)

    def notify(
        self,
        title: str,
        description: str,
        *,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> None:
        self.toasts.append(Toast(title=title, description=description, variant=variant))
        self._log.notify(title, description, variant=variant)

    def drain(self) -> list[Toast]:
        drained, self.toasts = self.toasts, []
        return drained

    @property
    def errors(self) -> list[Toast]:
        return [toast for toast in self.toasts if toast.is_destructive]
