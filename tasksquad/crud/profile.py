"""
Profile CRUD operations.
"""
from __future__ import annotations

from tasksquad.crud.base import CRUDBase
from tasksquad.models.profile import Profile


class CRUDProfile(CRUDBase[Profile]):
    pass


crud_profile = CRUDProfile(Profile)
