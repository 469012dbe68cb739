"""
Kanban board partition over a TaskStore.
"""
from __future__ import annotations

from dataclasses import dataclass

from tasksquad.schemas.task import Task, TaskStatus
from tasksquad.services.task_store import TaskStore

STATUS_COLUMNS: tuple[tuple[TaskStatus, str], ...] = (
    ("todo", "To-Do"),
    ("doing", "Doing"),
    ("done", "Done"),
)

PRIORITY_BADGES: dict[str, str] = {
    "high": "destructive",
    "medium": "default",
    "low": "secondary",
}


@dataclass(frozen=True, slots=True)
class BoardColumn:
    status: TaskStatus
    title: str
    tasks: tuple[Task, ...]

    @property
    def count(self) -> int:
        return len(self.tasks)


def build_board(store: TaskStore) -> list[BoardColumn]:
    """One column per status, in workflow order."""
    return [
        BoardColumn(status=status, title=title, tasks=tuple(store.get_tasks_by_status(status)))
        for status, title in STATUS_COLUMNS
    ]


def priority_badge(priority: str) -> str:
    return PRIORITY_BADGES.get(priority, "default")
