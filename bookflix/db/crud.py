"""CRUD helpers for users and their reading documents.

All methods work with a SQLAlchemy ``Session`` and flush on writes; callers
own the transaction and commit.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookflix.reading.models import AVATAR_URL

from .models import User, UserDocument

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# camelCase document keys -> user_documents columns
DOCUMENT_COLUMNS = {
    "bucketList": "bucket_list",
    "readingHistory": "reading_history",
    "reviews": "reviews",
    "currentlyReading": "currently_reading",
}


def _require_non_empty(value: str | None, field_name: str) -> str:
    """Validate that a string field is not None, empty, or whitespace-only."""
    if value is None:
        raise ValueError(f"{field_name} is required")
    value = str(value).strip()
    if not value:
        raise ValueError(f"{field_name} must not be empty")
    return value


def _validate_email(email: str) -> str:
    """Validate basic email format and return the stripped value."""
    email = _require_non_empty(email, "email")
    if not _EMAIL_RE.match(email):
        raise ValueError(f"Invalid email format: {email!r}")
    return email


def _validate_genres(genres: list[str] | None) -> list[str]:
    """Strip, de-duplicate and require at least one favourite genre."""
    cleaned = list(dict.fromkeys(g.strip() for g in (genres or []) if g and g.strip()))
    if not cleaned:
        raise ValueError("Please select at least one favorite genre")
    return cleaned


def _check_unique(session: Session, model, field, value, label: str) -> None:
    """Pre-check a UNIQUE column, raising ValueError on conflict."""
    if session.scalar(select(model).where(field == value)) is not None:
        raise ValueError(f"{label} {value!r} is already taken")


class UserCRUD:
    @staticmethod
    def get_by_id(session: Session, user_id: str) -> User | None:
        return session.get(User, str(user_id))

    @staticmethod
    def get_by_email(session: Session, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return session.scalar(stmt)

    @staticmethod
    def create(
        session: Session,
        email: str,
        name: str,
        favorite_genres: list[str],
        **kwargs,
    ) -> User:
        email = _validate_email(email)
        name = _require_non_empty(name, "name")
        favorite_genres = _validate_genres(favorite_genres)
        _check_unique(session, User, User.email, email, "email")
        kwargs.setdefault("id", uuid4().hex)
        kwargs.setdefault("avatar", AVATAR_URL.format(name=quote(name, safe="")))
        kwargs.setdefault("join_date", datetime.now(timezone.utc))
        user = User(
            email=email,
            name=name,
            favorite_genres=favorite_genres,
            **kwargs,
        )
        session.add(user)
        session.flush()
        return user

    @staticmethod
    def delete(session: Session, user_id: str) -> bool:
        user = session.get(User, user_id)
        if not user:
            return False
        session.delete(user)
        session.flush()
        return True


class UserDocumentCRUD:
    @staticmethod
    def get(session: Session, user_id: str) -> UserDocument | None:
        return session.get(UserDocument, user_id)

    @staticmethod
    def read(session: Session, user_id: str) -> dict[str, Any]:
        """The stored document as a camelCase dict; empty when the user has none yet."""
        row = UserDocumentCRUD.get(session, user_id)
        if row is None:
            return {}
        return {key: getattr(row, column) for key, column in DOCUMENT_COLUMNS.items()}

    @staticmethod
    def merge_update(session: Session, user_id: str, fields: dict[str, Any]) -> UserDocument:
        """Overwrite the given top-level fields, creating the row on first write.

        Raises:
            ValueError: For keys that are not document fields
        """
        unknown = set(fields) - set(DOCUMENT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown document fields: {sorted(unknown)}")
        row = UserDocumentCRUD.get(session, user_id)
        if row is None:
            row = UserDocument(
                user_id=user_id,
                bucket_list=[],
                reading_history=[],
                reviews={},
                currently_reading=[],
            )
            session.add(row)
        for key, value in fields.items():
            setattr(row, DOCUMENT_COLUMNS[key], value)
        row.updated_at = datetime.now(timezone.utc)
        session.flush()
        return row
