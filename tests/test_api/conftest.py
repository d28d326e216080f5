"""Fixtures for the HTTP tests.

The app runs against an in-memory document store, a fake catalog and an
in-memory SQLite users table; no network or database server is needed.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-bookflix-api-tests")
os.environ["STORAGE_MODE"] = "memory"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from apps.api.core.config import get_settings
from apps.api.core.deps import get_catalog, get_current_user, get_db, get_document_store
from apps.api.core.shelves import clear_shelf_cache
from apps.api.main import app
from bookflix.db.base import Base
from bookflix.reading import MemoryDocumentStore, User
from tests.test_catalog.conftest import FakeCatalog

get_settings.cache_clear()


@pytest.fixture
def documents():
    return MemoryDocumentStore()


@pytest.fixture
def reader():
    return User(id="u1", email="alice@example.com", name="Alice", favorite_genres=["fiction"])


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, future=True)
    engine.dispose()


@pytest.fixture
def anonymous_client(documents, fake_catalog, db_session_factory):
    def override_db():
        with db_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_document_store] = lambda: documents
    app.dependency_overrides[get_catalog] = lambda: fake_catalog
    clear_shelf_cache()
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_shelf_cache()


@pytest.fixture
def client(anonymous_client, reader):
    app.dependency_overrides[get_current_user] = lambda: reader
    return anonymous_client
