import os

# Settings are read once and cached, so the test environment must be in place
# before the application is imported.
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import content_studio.models  # noqa: F401
from content_studio.db.base import Base
from content_studio.main import app
from content_studio.models.user import UserType
from content_studio.services.content_generator import get_content_generator
from content_studio.stores import get_store
from content_studio.stores.memory import MemoryStore
from content_studio.stores.sql import SqlStore
from content_studio.utils.auth import create_session_token


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield SqlStore(db)
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def store(request):
    """Store used by the API in route tests. Parametrize indirectly with "sql" to use SQLite."""
    backend = getattr(request, "param", "memory")
    return request.getfixturevalue(f"{backend}_store")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def override_generator():
    """Swap the content generator for the duration of a test."""

    def _override(generator):
        app.dependency_overrides[get_content_generator] = lambda: generator

    return _override


@pytest.fixture
def make_user(store):
    def _make_user(email="creator@example.com", name="Ana Creator", user_type=UserType.BASIC, **fields):
        user = store.upsert_user(email, name=name, image="https://example.com/avatar.png")
        if user_type != UserType.BASIC or fields:
            user = store.update_user_fields(user.id, user_type=user_type, **fields)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user) -> dict:
        return {"Authorization": f"Bearer {create_session_token(user)}"}

    return _auth_headers
