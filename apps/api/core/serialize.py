"""Helpers to turn domain models into API response dicts."""

from __future__ import annotations

from datetime import datetime, timezone

from bookflix.catalog import Shelf
from bookflix.reading import ActivityItem, Book, Mutation, User


def relative_time(dt: datetime) -> str:
    now = datetime.now(timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = now - dt
    seconds = max(int(delta.total_seconds()), 0)
    if seconds < 3600:
        m = max(1, seconds // 60)
        return f"{m}m ago"
    if seconds < 86400:
        h = seconds // 3600
        return f"{h}h ago"
    if seconds < 604800:
        d = seconds // 86400
        return f"{d}d ago"
    w = seconds // 604800
    return f"{w}w ago"


def serialize_user(user: User) -> dict:
    return user.to_document()


def serialize_book(book: Book) -> dict:
    return book.to_document()


def serialize_books(books: list[Book]) -> list[dict]:
    return [serialize_book(b) for b in books]


def serialize_shelf(shelf: Shelf) -> dict:
    return {
        "key": shelf.key,
        "name": shelf.name,
        "books": serialize_books(shelf.books),
    }


def serialize_activity(item: ActivityItem) -> dict:
    data = item.to_document()
    data["timestamp"] = relative_time(item.date)
    return data


def serialize_mutation(mutation: Mutation) -> dict:
    return {
        "operation": mutation.operation,
        "status": mutation.status.value,
        "error": str(mutation.error) if mutation.error is not None else None,
    }
