"""Service test fixtures — fake git backend, async DB, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_attempt_recorder overridden with a recorder on the temporary git_repo

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Real git for route tests: the recorder is the thing under test, faking it
      would only test the fake
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from codedeck.api.dependencies import get_attempt_recorder
from codedeck.db.base import Base
from codedeck.infrastructure.database import get_db, DatabaseSessionManager
from codedeck.infrastructure.git_cli import SubprocessGitBackend
from codedeck.services.attempt_recorder import AttemptRecorder
import codedeck.infrastructure.database as db_module
import codedeck.models  # noqa: F401
from codedeck.main import app

from tests.services.fake_git import FakeGitBackend


@pytest.fixture
def fake_git():
    return FakeGitBackend()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def recorder(recorder_config):
    return AttemptRecorder(recorder_config, SubprocessGitBackend())


@pytest.fixture
async def client(test_engine, test_session_factory, recorder):
    """FastAPI test client with DB and recorder dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_attempt_recorder] = lambda: recorder

    # Readiness probe uses db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
