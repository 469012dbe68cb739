"""
Explicit dependency bundle handed to every store.
Replaces ambient session/user lookups with a value the caller constructs.
"""
from __future__ import annotations

from dataclasses import dataclass

from tasksquad.core.ports import IdentityProvider, NotificationSink, RemoteStore
from tasksquad.schemas.user import CurrentUser


@dataclass(frozen=True, slots=True)
class StoreContext:
    identity: IdentityProvider
    remote: RemoteStore
    notifier: NotificationSink

    @property
    def user(self) -> CurrentUser | None:
        return self.identity.current_user()
