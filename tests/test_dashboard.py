"""
Dashboard composition and board partition tests.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from tasksquad.core.config import Settings
from tasksquad.core.dependencies import StoreContext
from tasksquad.main import Dashboard, create_dashboard
from tasksquad.schemas.user import CurrentUser
from tasksquad.services.board import build_board, priority_badge
from tasksquad.services.identity_service import StaticIdentityProvider
from tasksquad.services.task_store import TaskStore

from conftest import ALICE_ID, BOB_ID
from fakes import Seeder, preserved_logging


class _SessionIdentity:
    """An identity provider that is not the bundled static one."""

    def current_user(self) -> CurrentUser | None:
        return CurrentUser(id=ALICE_ID, email="alice@example.com")


@pytest.mark.asyncio
class TestDashboard:
    async def test_start_binds_default_team(self, context: StoreContext, seed: Seeder) -> None:
        older = await seed.team("Older", created_by=ALICE_ID)
        newer = await seed.team("Newer", created_by=ALICE_ID)
        await seed.task("Older work", team_id=older.id, created_by=ALICE_ID)
        await seed.task("Newer work", team_id=newer.id, created_by=ALICE_ID)

        dashboard = Dashboard(context)
        await dashboard.start()

        assert dashboard.tasks.team_id == newer.id
        assert [t.title for t in dashboard.tasks.tasks] == ["Newer work"]

    async def test_select_team_passes_id_by_value(
        self, context: StoreContext, seed: Seeder
    ) -> None:
        older = await seed.team("Older", created_by=ALICE_ID)
        await seed.team("Newer", created_by=ALICE_ID)
        await seed.task("Older work", team_id=older.id, created_by=ALICE_ID)

        dashboard = Dashboard(context)
        await dashboard.start()
        await dashboard.select_team(older.id)

        assert dashboard.tasks.team_id == older.id
        assert [t.title for t in dashboard.tasks.tasks] == ["Older work"]

    async def test_create_team_moves_task_board(
        self, context: StoreContext, seed: Seeder
    ) -> None:
        dashboard = Dashboard(context)
        await dashboard.start()
        assert dashboard.tasks.team_id is None

        team = await dashboard.create_team("Launch")
        assert team is not None
        await dashboard.tasks.create_task({"title": "Ship report"})

        assert dashboard.tasks.team_id == team.id
        assert [t.title for t in dashboard.tasks.tasks] == ["Ship report"]

    async def test_board_columns(self, context: StoreContext, seed: Seeder) -> None:
        team = await seed.team("Crew", created_by=ALICE_ID)
        await seed.task("a", team_id=team.id, created_by=ALICE_ID, status="doing")
        await seed.task("b", team_id=team.id, created_by=ALICE_ID, status="done")
        await seed.task("c", team_id=team.id, created_by=ALICE_ID, status="doing")

        dashboard = Dashboard(context)
        await dashboard.start()
        columns = dashboard.board()

        assert [(c.status, c.title, c.count) for c in columns] == [
            ("todo", "To-Do", 0),
            ("doing", "Doing", 2),
            ("done", "Done", 1),
        ]
        assert [t.title for t in columns[1].tasks] == ["c", "a"]

    async def test_create_dashboard_from_settings(self, tmp_path: Path) -> None:
        settings = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'squad.db'}")
        identity = StaticIdentityProvider(CurrentUser(id=BOB_ID))

        with preserved_logging():
            dashboard = await create_dashboard(identity, settings)
            try:
                await dashboard.start()
                team = await dashboard.create_team("Night shift")
                assert team is not None
                assert dashboard.teams.current_team == team
                assert [m.role for m in dashboard.teams.team_members] == ["admin"]
            finally:
                await dashboard.close()

        assert (tmp_path / "squad.db").exists()

    async def test_create_dashboard_takes_any_identity_provider(self, tmp_path: Path) -> None:
        settings = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'squad.db'}")

        with preserved_logging():
            dashboard = await create_dashboard(_SessionIdentity(), settings)
            try:
                await dashboard.start()
                await dashboard.create_team("Day shift")
                await dashboard.tasks.create_task({"title": "Open up"})
                assert [t.created_by for t in dashboard.tasks.tasks] == [ALICE_ID]
            finally:
                await dashboard.close()


@pytest.mark.asyncio
async def test_empty_store_builds_empty_columns(context: StoreContext) -> None:
    columns = build_board(TaskStore(context))

    assert [c.tasks for c in columns] == [(), (), ()]


def test_priority_badges() -> None:
    assert priority_badge("high") == "destructive"
    assert priority_badge("medium") == "default"
    assert priority_badge("low") == "secondary"
    assert priority_badge("urgent") == "default"
