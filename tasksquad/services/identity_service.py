"""
In-process identity provider.
Holds the signed-in user handed over by whatever authenticated them.
"""
from __future__ import annotations

import logging

from tasksquad.schemas.user import CurrentUser

logger = logging.getLogger(__name__)


class StaticIdentityProvider:

    def __init__(self, user: CurrentUser | None = None) -> None:
        self._user = user

    def current_user(self) -> CurrentUser | None:
        return self._user

    def sign_in(self, user: CurrentUser) -> None:
        logger.info("Signed in user_id=%s", user.id)
        self._user = user

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("Signed out user_id=%s", self._user.id)
        self._user = None
