"""
Personal Logger — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── database_url: SQLite file inside the test's tmp_path
    ├── clock:        Deterministic clock, one second per reading
    ├── storage:      Initialized StorageEngine on database_url + clock
    └── test_client:  HTTPX AsyncClient bound to an app serving `storage`
"""

import os
from datetime import datetime, timedelta, timezone

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from personal_logger.services.storage_engine import StorageEngine


class FakeClock:
    """
    Callable clock for the storage engine.

    Each call returns the current reading, then advances by `step`
    (a zero step gives every entry the same timestamp).
    """

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        reading = self.now
        self.now = self.now + self.step
        return reading


START = datetime(2026, 10, 18, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def database_url(tmp_path):
    """Async URL of a fresh SQLite file for this test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'PersonalLogger.db'}"


@pytest.fixture
def database_path(tmp_path):
    return tmp_path / "PersonalLogger.db"


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest_asyncio.fixture
async def storage(database_url, clock):
    """
    An initialized StorageEngine on an empty store.

    Usage:
        async def test_append(storage):
            entry = await storage.append(EntryCreate(type="note", content="hi"))
    """
    engine = StorageEngine(database_url=database_url, clock=clock)
    await engine.initialize()
    yield engine
    await engine.close()


@pytest_asyncio.fixture
async def test_client(storage):
    """
    HTTPX AsyncClient talking to an app that serves the `storage` fixture.

    ASGITransport does not run the lifespan, so the store is initialized by
    the storage fixture instead.
    """
    from personal_logger.main import create_app

    app = create_app(storage=storage, force_https=False)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
