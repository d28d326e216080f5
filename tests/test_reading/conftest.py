"""Shared fixtures and factory helpers for the reading-state tests.

Everything runs against the in-memory document store with a controllable
clock, so tests are deterministic and need no database.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from bookflix.reading import (
    Book,
    BucketListEntry,
    MemoryDocumentStore,
    ReadingHistoryEntry,
    ReadingListStore,
    ReadingStatus,
    Review,
    User,
)

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def documents():
    return MemoryDocumentStore()


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def store(documents, user, clock):
    reading_store = ReadingListStore(documents, user, clock=clock)
    yield reading_store
    reading_store.close()


# ---------------------------------------------------------------------------
# Factory helpers (plain functions, not fixtures, so tests can call them
# with custom arguments easily)
# ---------------------------------------------------------------------------


def make_user(user_id="u1", email="alice@example.com", name="Alice", **kwargs):
    kwargs.setdefault("favorite_genres", ["fiction"])
    return User(id=user_id, email=email, name=name, **kwargs)


def make_book(book_id="b1", title=None, **kwargs):
    return Book(id=book_id, title=title or f"Book {book_id}", **kwargs)


def make_entry(book_id="b1", status=ReadingStatus.PLANNED, added_date=T0, **kwargs):
    return BucketListEntry.from_book(make_book(book_id, **kwargs), status=status, added_date=added_date)


def make_history(book_id="b1", completed_date=T0, **kwargs):
    return ReadingHistoryEntry.from_book(make_book(book_id, **kwargs), completed_date=completed_date)


def make_review(book_id="b1", created_date=T0, rating=4, **kwargs):
    kwargs.setdefault("reading_date", date(2024, 3, 1))
    return Review(book_id=book_id, user_id="u1", rating=rating, created_date=created_date, **kwargs)
