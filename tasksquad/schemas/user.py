"""
Identity and profile Pydantic schemas.
"""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict


class CurrentUser(BaseModel):
    """The signed-in user as reported by the identity provider."""

    id: uuid.UUID
    email: str | None = None

    model_config = ConfigDict(frozen=True)


class ProfileSummary(BaseModel):
    """Display projection joined onto tasks and memberships. Never written back."""

    display_name: str | None = None
    avatar_url: str | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)
