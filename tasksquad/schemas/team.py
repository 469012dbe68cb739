"""
Team and TeamMember Pydantic schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from tasksquad.schemas.user import ProfileSummary

TeamMemberRole = Literal["admin", "member"]


# ── Team Create / Read ────────────────────────────────────────────────────────

class TeamCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class Team(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True, from_attributes=True)


# ── TeamMember schemas ────────────────────────────────────────────────────────

class TeamMemberCreate(BaseModel):
    team_id: uuid.UUID
    user_id: uuid.UUID
    role: TeamMemberRole = "member"


class TeamMember(BaseModel):
    id: uuid.UUID
    team_id: uuid.UUID
    user_id: uuid.UUID
    role: TeamMemberRole
    joined_at: datetime
    profile: ProfileSummary | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)
