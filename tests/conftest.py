"""
Test configuration and shared fixtures.
Each test gets a fresh in-memory SQLite database behind the real remote store.
"""
from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tasksquad.core.dependencies import StoreContext
from tasksquad.db.remote_store import SQLAlchemyRemoteStore
from tasksquad.db.session import create_engine, create_session_factory, init_models
from tasksquad.schemas.user import CurrentUser
from tasksquad.services.identity_service import StaticIdentityProvider
from tasksquad.services.notification_service import CollectingNotificationSink
from tasksquad.services.task_store import TaskStore
from tasksquad.services.team_store import TeamStore

from fakes import RecordingRemoteStore, Seeder

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALICE_ID = uuid.UUID("00000000-0000-0000-0000-00000000a11c")
BOB_ID = uuid.UUID("00000000-0000-0000-0000-000000000b0b")


# ── Database ──────────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def seed(session_factory: async_sessionmaker[AsyncSession]) -> Seeder:
    seeder = Seeder(session_factory)
    await seeder.profile(ALICE_ID, "Alice")
    await seeder.profile(BOB_ID, "Bob")
    return seeder


# ── Ports ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def alice() -> CurrentUser:
    return CurrentUser(id=ALICE_ID, email="alice@example.com")


@pytest.fixture
def identity(alice: CurrentUser) -> StaticIdentityProvider:
    return StaticIdentityProvider(alice)


@pytest.fixture
def remote(
    session_factory: async_sessionmaker[AsyncSession],
    identity: StaticIdentityProvider,
) -> SQLAlchemyRemoteStore:
    return SQLAlchemyRemoteStore(session_factory, identity=identity)


@pytest.fixture
def recording(remote: SQLAlchemyRemoteStore) -> RecordingRemoteStore:
    return RecordingRemoteStore(remote)


@pytest.fixture
def notifier() -> CollectingNotificationSink:
    return CollectingNotificationSink()


@pytest.fixture
def context(
    identity: StaticIdentityProvider,
    recording: RecordingRemoteStore,
    notifier: CollectingNotificationSink,
) -> StoreContext:
    return StoreContext(identity=identity, remote=recording, notifier=notifier)


# ── Stores ────────────────────────────────────────────────────────────────────

@pytest.fixture
def team_store(context: StoreContext) -> TeamStore:
    return TeamStore(context)


@pytest.fixture
def task_store(context: StoreContext) -> TaskStore:
    return TaskStore(context)
