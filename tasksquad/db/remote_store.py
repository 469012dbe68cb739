"""
SQLAlchemy-backed RemoteStore adapter.
Serves the teams, team_members, tasks and profiles tables through the
table-scoped select/insert/update/delete contract. Every call runs in its own
session and reports failures as a StoreResponse error instead of raising.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasksquad.core.ports import IdentityProvider, Join, Row, StoreError, StoreResponse
from tasksquad.crud.base import CRUDBase
from tasksquad.crud.profile import crud_profile
from tasksquad.crud.task import crud_task
from tasksquad.crud.team import crud_team, crud_team_member

logger = logging.getLogger(__name__)

_STORE_FAILURES = (SQLAlchemyError, KeyError, ValueError)


class SQLAlchemyRemoteStore:
    """
    RemoteStore over an async SQLAlchemy session factory.

    When an identity provider is given, reads of ``teams`` only return teams
    the signed-in user created or is a member of (nothing when signed out).
    Without one, every row is visible.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        identity: IdentityProvider | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._identity = identity
        self._tables: dict[str, CRUDBase[Any]] = {
            "profiles": crud_profile,
            "teams": crud_team,
            "team_members": crud_team_member,
            "tasks": crud_task,
        }

    # ── Contract ──────────────────────────────────────────────────────────────

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        joins: Sequence[Join] = (),
    ) -> StoreResponse:
        try:
            crud = self._crud(table)
            async with self._session() as db:
                if table == "teams" and self._identity is not None:
                    objs = await self._visible_teams(
                        db,
                        self._identity,
                        filters=filters,
                        order_by=order_by,
                        descending=descending,
                    )
                else:
                    objs = await crud.list_where(
                        db, filters=filters, order_by=order_by, descending=descending
                    )
                rows = [crud.to_row(obj) for obj in objs]
                for join in joins:
                    await self._attach(db, rows, join)
        except _STORE_FAILURES as exc:
            return self._failure("select", table, exc)
        return StoreResponse(data=rows)

    async def insert(self, table: str, values: Mapping[str, Any]) -> StoreResponse:
        try:
            crud = self._crud(table)
            async with self._session() as db:
                obj = await crud.create_from_dict(db, obj_in=values)
                row = crud.to_row(obj)
        except _STORE_FAILURES as exc:
            return self._failure("insert", table, exc)
        return StoreResponse(data=[row])

    async def update(
        self, table: str, values: Mapping[str, Any], *, id: Any
    ) -> StoreResponse:
        try:
            crud = self._crud(table)
            async with self._session() as db:
                obj = await crud.update_by_id(db, id=id, obj_in=values)
                rows = [] if obj is None else [crud.to_row(obj)]
        except _STORE_FAILURES as exc:
            return self._failure("update", table, exc)
        return StoreResponse(data=rows)

    async def delete(self, table: str, *, id: Any) -> StoreResponse:
        try:
            crud = self._crud(table)
            async with self._session() as db:
                obj = await crud.remove(db, id=id)
                rows = [] if obj is None else [crud.to_row(obj)]
        except _STORE_FAILURES as exc:
            return self._failure("delete", table, exc)
        return StoreResponse(data=rows)

    # ── Private helpers ───────────────────────────────────────────────────────

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def _crud(self, table: str) -> CRUDBase[Any]:
        try:
            return self._tables[table]
        except KeyError:
            raise KeyError(f"relation {table!r} does not exist") from None

    @staticmethod
    async def _visible_teams(
        db: AsyncSession, identity: IdentityProvider, **query: Any
    ) -> list[Any]:
        user = identity.current_user()
        if user is None:
            return []
        return await crud_team.list_visible_to(db, user_id=user.id, **query)

    async def _attach(self, db: AsyncSession, rows: list[Row], join: Join) -> None:
        related = self._crud(join.table)
        for column in join.columns:
            related.column(column)
        keys = {row[join.local_key] for row in rows if row[join.local_key] is not None}
        by_id = {obj.id: obj for obj in await related.get_many(db, keys)}
        for row in rows:
            target = by_id.get(row[join.local_key])
            row[join.alias] = (
                None
                if target is None
                else {column: getattr(target, column) for column in join.columns}
            )

    @staticmethod
    def _failure(operation: str, table: str, exc: Exception) -> StoreResponse:
        if isinstance(exc, DBAPIError) and exc.orig is not None:
            message = str(exc.orig)
        elif isinstance(exc, KeyError) and exc.args:
            message = str(exc.args[0])
        else:
            message = str(exc)
        logger.warning("Remote %s on %s failed: %s", operation, table, message)
        return StoreResponse(error=StoreError(message=message, code=type(exc).__name__))
