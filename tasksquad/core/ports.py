"""
Ports (interfaces) the stores depend on.

The stores talk to Protocols instead of concrete adapters, so the identity
source, the relational backend and the toast surface stay swappable and tests
can wrap or replace any of them.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from tasksquad.schemas.user import CurrentUser

Row = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Join:
    """
    Read-only projection of a related row.

    ``local_key`` on the selected row is matched against ``id`` of ``table``;
    the listed ``columns`` are attached under ``alias`` (or ``None`` when the
    key is empty or the related row is missing).
    """

    alias: str
    table: str
    local_key: str
    columns: tuple[str, ...] = ("display_name", "avatar_url")


@dataclass(frozen=True, slots=True)
class StoreError:
    message: str
    code: str | None = None


@dataclass(frozen=True, slots=True)
class StoreResponse:
    """Either a payload or an error; adapters never raise for store failures."""

    data: list[Row] = field(default_factory=list)
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class IdentityProvider(Protocol):
    """Source of the signed-in user; ``None`` means not authenticated."""

    def current_user(self) -> CurrentUser | None: ...


class RemoteStore(Protocol):
    """Table-scoped query/insert/update/delete capability."""

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        joins: Sequence[Join] = (),
    ) -> StoreResponse: ...

    async def insert(self, table: str, values: Mapping[str, Any]) -> StoreResponse: ...

    async def update(
        self, table: str, values: Mapping[str, Any], *, id: Any
    ) -> StoreResponse: ...

    async def delete(self, table: str, *, id: Any) -> StoreResponse: ...


class NotificationSink(Protocol):
    """Fire-and-forget toast surface."""

    def notify(
        self,
        title: str,
        description: str,
        *,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> None: ...
