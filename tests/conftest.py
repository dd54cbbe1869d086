"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.test_constants import ALICE, BOB, CAROL, DAVE, TEST_SECRET_KEY, USER_EMAILS

# In-memory SQLite for the relational backend; don't inherit from .env
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "database"
os.environ["DEMO_DATA_PATH"] = ""
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)


@pytest.fixture
def db() -> Session:
    """Database session on a fresh schema. Tables are dropped after each test."""
    from levelcre import models  # noqa: F401
    from levelcre.db import Base, SessionLocal, engine

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(params=["database", "memory"])
def store(request: pytest.FixtureRequest):
    """Every store-level test runs against both backends."""
    from levelcre.storage import DatabaseStore, MemoryStore

    if request.param == "database":
        return DatabaseStore(request.getfixturevalue("db"))
    return MemoryStore()


@pytest.fixture
def users(store) -> dict[str, str]:
    """alice, bob, carol and dave exist in the store."""
    for user_id in (ALICE, BOB, CAROL, DAVE):
        store.ensure_user(user_id, USER_EMAILS[user_id])
    return dict(USER_EMAILS)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from levelcre.main import app

    return TestClient(app)


@pytest.fixture
def api_client(db: Session):
    """TestClient with get_db overridden to use the test db session."""
    from levelcre.db.session import get_db
    from levelcre.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def memory_api_client():
    """TestClient backed by a fresh MemoryStore instead of the database."""
    from levelcre.api.deps import get_store
    from levelcre.main import app
    from levelcre.storage import MemoryStore

    memory_store = MemoryStore()

    def override_get_store():
        return memory_store

    app.dependency_overrides[get_store] = override_get_store
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(params=["database", "memory"])
def any_api_client(request: pytest.FixtureRequest) -> TestClient:
    """API tests that must behave the same on both backends."""
    if request.param == "database":
        return request.getfixturevalue("api_client")
    return request.getfixturevalue("memory_api_client")
