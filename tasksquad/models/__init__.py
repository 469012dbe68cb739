"""
ORM model package. Import all models here so metadata.create_all
can discover every table through the shared Base metadata.
"""
from tasksquad.models.profile import Profile  # noqa: F401
from tasksquad.models.team import Team, TeamMember  # noqa: F401
from tasksquad.models.task import Task  # noqa: F401
