"""
Task Pydantic schemas.
Writable shapes (create/update) never carry the joined profile projections;
only the read model does.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasksquad.schemas.user import ProfileSummary

TaskStatus = Literal["todo", "doing", "done"]
TaskPriority = Literal["low", "medium", "high"]

TASK_STATUSES: tuple[TaskStatus, ...] = ("todo", "doing", "done")


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ── Create ────────────────────────────────────────────────────────────────────

class TaskCreate(BaseModel):
    """
    Caller-supplied fields for a new task.
    ``team_id`` and ``created_by`` are absent on purpose: the store stamps them.
    """

    title: str
    description: str | None = None
    priority: TaskPriority = "medium"
    assigned_to: uuid.UUID | None = None
    due_date: datetime | None = None

    @field_validator("description", "assigned_to", "due_date", mode="before")
    @classmethod
    def empty_string_means_unset(cls, v: Any) -> Any:
        """Form inputs send "" for untouched optional fields."""
        return _blank_to_none(v)


# ── Update ────────────────────────────────────────────────────────────────────

class TaskUpdate(BaseModel):
    """
    Arbitrary partial update. Only fields explicitly set are sent.
    Which fields a caller may change is the caller's decision.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: uuid.UUID | None = None
    due_date: datetime | None = None
    team_id: uuid.UUID | None = None
    created_by: uuid.UUID | None = None

    model_config = ConfigDict(extra="forbid")


# ── Read ──────────────────────────────────────────────────────────────────────

class Task(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    team_id: uuid.UUID
    assigned_to: uuid.UUID | None = None
    created_by: uuid.UUID
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    assigned_user: ProfileSummary | None = None
    creator: ProfileSummary | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)
