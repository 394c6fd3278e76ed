"""Pytest configuration and fixtures for phaseboard.

API tests run the app from phaseboard.main.create_app() with in-memory
collaborators injected into app.state; repository tests use a SQLite file
per test (aiosqlite) created from the ORM metadata.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.api.v1.dependencies import TaskServices
from phaseboard.application.services import (
    AccessPolicy,
    PhaseEntryAutomation,
    PhaseEventBus,
    PrivacyAutomation,
)
from phaseboard.application.use_cases.tasks import (
    BulkMutationCoordinator,
    TaskMutationCoordinator,
)
from phaseboard.core.config import get_settings
from phaseboard.infrastructure.persistence.database import (
    Base,
    build_engine,
    build_session_factory,
)
from tests.fakes import (
    FakeAdvancer,
    FakePersonLookup,
    FakeTaskPersistence,
    RecordingInvalidator,
    RecordingNotifications,
)

get_settings.cache_clear()


@pytest.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Session factory over a fresh SQLite database with all tables created."""
    from phaseboard.infrastructure.persistence import models  # noqa: F401

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'phaseboard.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def persistence() -> FakeTaskPersistence:
    return FakeTaskPersistence()


@pytest.fixture
def person_lookup() -> FakePersonLookup:
    return FakePersonLookup()


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def invalidator() -> RecordingInvalidator:
    return RecordingInvalidator()


@pytest.fixture
def advancer() -> FakeAdvancer:
    return FakeAdvancer()


@pytest.fixture
def task_services(
    persistence: FakeTaskPersistence,
    person_lookup: FakePersonLookup,
    notifications: RecordingNotifications,
    invalidator: RecordingInvalidator,
    advancer: FakeAdvancer,
) -> TaskServices:
    """TaskServices wired to in-memory collaborators (no assignment policy)."""
    privacy = PrivacyAutomation(persistence, person_lookup, notifications)
    bus = PhaseEventBus()
    PhaseEntryAutomation(persistence, privacy).register(bus)
    policy = AccessPolicy()
    updater = TaskMutationCoordinator(persistence, advancer, privacy, bus, invalidator)
    return TaskServices(
        persistence=persistence,
        access_policy=policy,
        privacy=privacy,
        phase_events=bus,
        updater=updater,
        bulk=BulkMutationCoordinator(persistence, updater, policy, bus, invalidator),
    )


@pytest.fixture
async def client(task_services: TaskServices) -> AsyncClient:
    """Async HTTP client against a fresh app (ASGI) using the in-memory task services.

    ASGITransport does not run the lifespan, so the services are injected directly.
    """
    from phaseboard.main import create_app

    app = create_app()
    app.state.task_services = task_services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await task_services.privacy.drain_notifications()
