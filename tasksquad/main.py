"""
Task Squad composition root.
Wires one TeamStore and one TaskStore over a shared context and keeps the
selected team id flowing, by value, from the former into the latter.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncEngine

from tasksquad.core.config import Settings, settings as default_settings
from tasksquad.core.dependencies import StoreContext
from tasksquad.core.logging import setup_logging
from tasksquad.core.ports import IdentityProvider
from tasksquad.db.remote_store import SQLAlchemyRemoteStore
from tasksquad.db.session import create_engine_from_settings, create_session_factory, init_models
from tasksquad.schemas.team import Team
from tasksquad.services.board import BoardColumn, build_board
from tasksquad.services.notification_service import LoggingNotificationSink
from tasksquad.services.task_store import TaskStore
from tasksquad.services.team_store import TeamStore

logger = logging.getLogger(__name__)


class Dashboard:

    def __init__(self, context: StoreContext, *, engine: AsyncEngine | None = None) -> None:
        self.context = context
        self.teams = TeamStore(context)
        self.tasks = TaskStore(context)
        self._engine = engine

    async def start(self) -> None:
        """Load teams for the signed-in user and bind the default selection."""
        await self.teams.load()
        await self._follow_selection()

    async def select_team(self, team_id: uuid.UUID | str) -> Team | None:
        team = await self.teams.select_team(team_id)
        await self._follow_selection()
        return team

    async def create_team(self, name: str, description: str | None = None) -> Team | None:
        team = await self.teams.create_team(name, description)
        await self._follow_selection()
        return team

    def board(self) -> list[BoardColumn]:
        return build_board(self.tasks)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Remote store engine disposed")

    async def _follow_selection(self) -> None:
        current = self.teams.current_team
        await self.tasks.set_team_id(current.id if current is not None else None)


async def create_dashboard(
    identity: IdentityProvider,
    settings: Settings | None = None,
) -> Dashboard:
    """
    Build a Dashboard over the configured database.
    Tables are created if missing; call ``start()`` once the user is known.
    """
    settings = settings or default_settings
    setup_logging(settings)
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)

    engine = create_engine_from_settings(settings)
    await init_models(engine)
    remote = SQLAlchemyRemoteStore(create_session_factory(engine), identity=identity)
    context = StoreContext(identity=identity, remote=remote, notifier=LoggingNotificationSink())
    return Dashboard(context, engine=engine)
