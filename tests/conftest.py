"""
Pytest configuration and fixtures for the signage API tests.

Provides:
- An isolated in-memory SQLite database per test
- A controllable clock injected into the stores
- Store instances bound to the test session
- A FastAPI test client wired to the same database
"""

import os
import tempfile
from datetime import datetime, timedelta

# Configure the app before anything under signage/ is imported.
os.environ["SIGNAGE_DATABASE_URL"] = "sqlite://"
os.environ["SIGNAGE_STORAGE_DIR"] = tempfile.mkdtemp(prefix="signage-test-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from signage.db import Base, get_db
from signage.main import app
from signage.services.content_store import ContentStore
from signage.services.device_store import DeviceStore
from signage.services.integrity import IntegrityManager
from signage.services.playlist_store import PlaylistStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope='function')
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope='function')
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope='function')
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope='function')
def clock():
    return FakeClock(datetime(2024, 6, 3, 9, 0, 0))


@pytest.fixture(scope='function')
def integrity(db, clock):
    return IntegrityManager(db, clock)


@pytest.fixture(scope='function')
def content_store(db, integrity, clock):
    return ContentStore(db, integrity, clock)


@pytest.fixture(scope='function')
def playlist_store(db, integrity, clock):
    return PlaylistStore(db, integrity, clock)


@pytest.fixture(scope='function')
def device_store(db, clock):
    return DeviceStore(db, clock)


@pytest.fixture(scope='function')
def client(session_factory):
    """
    Test client whose requests use the per-test database.

    Yields:
        FastAPI TestClient
    """
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
