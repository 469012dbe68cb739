"""
Task CRUD operations.
"""
from __future__ import annotations

from tasksquad.crud.base import CRUDBase
from tasksquad.models.task import Task


class CRUDTask(CRUDBase[Task]):
    pass


crud_task = CRUDTask(Task)
