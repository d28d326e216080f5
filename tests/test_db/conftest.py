"""Shared fixtures and factory helpers for the SQLAlchemy CRUD tests.

Uses an in-memory SQLite database, no running Postgres required.
Each test gets a completely fresh database (function-scoped engine).
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookflix.db.base import Base
from bookflix.db.crud import UserCRUD


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    """Provide a fresh, isolated session for each test."""
    with Session(engine, autoflush=False) as sess:
        yield sess


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, future=True)


# ---------------------------------------------------------------------------
# Factory helpers (plain functions, not fixtures, so tests can call them
# with custom arguments easily)
# ---------------------------------------------------------------------------


def make_user(
    session,
    email="alice@example.com",
    name="Alice",
    favorite_genres=("fiction",),
    **kwargs,
):
    return UserCRUD.create(
        session,
        email=email,
        name=name,
        favorite_genres=list(favorite_genres),
        **kwargs,
    )
