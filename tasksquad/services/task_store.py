"""
Task state manager.
Owns the tasks of one team. The team id is a plain value handed in by the
caller; every mutation is followed by a full resynchronization.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from tasksquad.core.dependencies import StoreContext
from tasksquad.core.exceptions import InvalidInputError, RemoteError, ValidationError
from tasksquad.core.ports import Join
from tasksquad.schemas.task import Task, TaskCreate, TaskStatus, TaskUpdate
from tasksquad.services.store_base import BaseStore

logger = logging.getLogger(__name__)

TASK_PROFILES = (
    Join(alias="assigned_user", table="profiles", local_key="assigned_to"),
    Join(alias="creator", table="profiles", local_key="created_by"),
)


class TaskStore(BaseStore):
    """
    Tasks for the bound team, newest first.

    A fetch that resolves after ``team_id`` has changed still replaces
    ``tasks``: in-flight requests are neither cancelled nor discarded, so a
    slow response for the previous team can briefly overwrite the new one.
    """

    def __init__(self, context: StoreContext) -> None:
        super().__init__(context)
        self._team_id: uuid.UUID | None = None
        self._tasks: tuple[Task, ...] = ()

    @property
    def team_id(self) -> uuid.UUID | None:
        return self._team_id

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    async def set_team_id(self, team_id: uuid.UUID | None) -> None:
        """Rebind to another team, dropping the previous team's tasks."""
        if team_id == self._team_id:
            return
        self._team_id = team_id
        self._tasks = ()
        if team_id is None:
            self._loading = False
            return
        self._loading = True
        await self.fetch_tasks()

    async def fetch_tasks(self) -> None:
        team_id = self._team_id
        try:
            if team_id is None:
                raise ValidationError("No team selected")
            response = await self._ctx.remote.select(
                "tasks",
                filters={"team_id": team_id},
                order_by="created_at",
                descending=True,
                joins=TASK_PROFILES,
            )
            self._tasks = self._parse_rows(Task, "tasks", response)
            logger.debug("Fetched %d tasks for team_id=%s", len(self._tasks), team_id)
        except ValidationError as exc:
            self._skip("fetch_tasks", exc)
        except RemoteError as exc:
            self._fail("fetch_tasks", exc)
        finally:
            self._loading = False

    async def resync(self) -> None:
        """Bring ``tasks`` back in line with the store after a mutation."""
        await self.fetch_tasks()

    async def create_task(self, data: TaskCreate | Mapping[str, Any]) -> None:
        """
        Insert a task for the bound team as the signed-in user.
        ``team_id`` and ``created_by`` always come from the store, never from
        ``data``. The new task shows up only after the resync.
        """
        try:
            user = self._require_user()
            team_id = self._team_id
            if team_id is None:
                raise ValidationError("No team selected")
            task_in = self._build(TaskCreate, data, table="tasks")
            if not task_in.title.strip():
                raise ValidationError("Task title is required")

            response = await self._ctx.remote.insert(
                "tasks",
                {**task_in.model_dump(), "team_id": team_id, "created_by": user.id},
            )
            self._check("tasks", response)
        except ValidationError as exc:
            self._skip("create_task", exc)
            return
        except (InvalidInputError, RemoteError) as exc:
            self._fail("create_task", exc)
            return

        logger.info("Task created: team_id=%s created_by=%s", team_id, user.id)
        self._succeed("Task created successfully!")
        await self.resync()

    async def update_task(
        self, task_id: uuid.UUID, fields: TaskUpdate | Mapping[str, Any]
    ) -> None:
        """
        Apply a partial update. Any writable field may change, status moves
        between all three states freely; last write wins at the store.
        """
        try:
            task_in = self._build(TaskUpdate, fields, table="tasks")
            updates = task_in.model_dump(exclude_unset=True)
            if not updates:
                raise ValidationError("No fields to update")
            self._check("tasks", await self._ctx.remote.update("tasks", updates, id=task_id))
        except ValidationError as exc:
            self._skip("update_task", exc)
            return
        except (InvalidInputError, RemoteError) as exc:
            self._fail("update_task", exc)
            return

        logger.info("Task updated: task_id=%s fields=%s", task_id, sorted(updates))
        self._succeed("Task updated successfully!")
        await self.resync()

    async def delete_task(self, task_id: uuid.UUID) -> None:
        try:
            self._check("tasks", await self._ctx.remote.delete("tasks", id=task_id))
        except RemoteError as exc:
            self._fail("delete_task", exc)
            return

        logger.info("Task deleted: task_id=%s", task_id)
        self._succeed("Task deleted successfully!")
        await self.resync()

    def get_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return [task for task in self._tasks if task.status == status]
