"""
Generic async CRUD base class.
The remote store adapter dispatches every table-scoped call to one of these.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import Column, Select, Uuid, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasksquad.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Generic CRUD operations for SQLAlchemy async ORM models.

    Values arrive as plain mappings keyed by column name; string ids are
    accepted wherever a Uuid column is expected.
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model = model

    # ── Column helpers ────────────────────────────────────────────────────────

    @property
    def column_names(self) -> list[str]:
        return [column.key for column in self.model.__table__.columns]

    def column(self, field: str) -> Column[Any]:
        column = self.model.__table__.columns.get(field)
        if column is None:
            raise KeyError(f"{self.model.__tablename__} has no column {field!r}")
        return column

    def coerce(self, field: str, value: Any) -> Any:
        if isinstance(self.column(field).type, Uuid) and isinstance(value, str):
            return uuid.UUID(value)
        return value

    def coerce_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return {field: self.coerce(field, value) for field, value in values.items()}

    def to_row(self, db_obj: ModelType) -> dict[str, Any]:
        return {name: getattr(db_obj, name) for name in self.column_names}

    # ── Queries ───────────────────────────────────────────────────────────────

    def filtered(
        self,
        query: Select[Any],
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> Select[Any]:
        """Apply equality filters and an optional single-column ordering."""
        for field, value in self.coerce_values(filters or {}).items():
            query = query.where(self.column(field) == value)
        if order_by is not None:
            column = self.column(order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        return query

    async def get(self, db: AsyncSession, id: Any) -> ModelType | None:
        """Fetch a single record by primary key."""
        result = await db.execute(
            select(self.model).where(self.column("id") == self.coerce("id", id))
        )
        return result.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, ids: Iterable[Any]) -> list[ModelType]:
        """Fetch every record whose primary key is in ``ids``."""
        keys = {self.coerce("id", id) for id in ids}
        if not keys:
            return []
        result = await db.execute(select(self.model).where(self.column("id").in_(list(keys))))
        return list(result.scalars().all())

    async def list_where(
        self,
        db: AsyncSession,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[ModelType]:
        """Fetch records matching equality filters, optionally ordered."""
        query = self.filtered(
            select(self.model),
            filters=filters,
            order_by=order_by,
            descending=descending,
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # ── Mutations ─────────────────────────────────────────────────────────────

    async def create_from_dict(
        self, db: AsyncSession, *, obj_in: Mapping[str, Any]
    ) -> ModelType:
        """Create a new record from a plain dictionary."""
        db_obj = self.model(**self.coerce_values(obj_in))
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Mapping[str, Any],
    ) -> ModelType:
        """Update an existing record with the given fields only."""
        for field, value in self.coerce_values(obj_in).items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update_by_id(
        self,
        db: AsyncSession,
        *,
        id: Any,
        obj_in: Mapping[str, Any],
    ) -> ModelType | None:
        db_obj = await self.get(db, id)
        if db_obj is None:
            return None
        return await self.update(db, db_obj=db_obj, obj_in=obj_in)

    async def remove(self, db: AsyncSession, *, id: Any) -> ModelType | None:
        """Delete a record by primary key. Returns the deleted object or None."""
        db_obj = await self.get(db, id)
        if db_obj is None:
            return None
        await db.delete(db_obj)
        await db.flush()
        return db_obj
