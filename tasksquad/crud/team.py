"""
Team and TeamMember CRUD operations.
"""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasksquad.crud.base import CRUDBase
from tasksquad.models.team import Team, TeamMember


class CRUDTeam(CRUDBase[Team]):

    async def list_visible_to(
        self,
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Team]:
        """Return teams the user created or holds a membership in."""
        member_of = select(TeamMember.team_id).where(TeamMember.user_id == user_id)
        query = select(Team).where(
            or_(Team.created_by == user_id, Team.id.in_(member_of))
        )
        query = self.filtered(
            query, filters=filters, order_by=order_by, descending=descending
        )
        result = await db.execute(query)
        return list(result.scalars().all())


class CRUDTeamMember(CRUDBase[TeamMember]):
    pass


crud_team = CRUDTeam(Team)
crud_team_member = CRUDTeamMember(TeamMember)
