"""Domain models for reading lists, reading history and reviews.

All models serialize with camelCase keys (``publishedDate``, ``addedDate``,
``moodTags``...) so a persisted user document keeps the shape the web client
reads, while Python code uses snake_case attributes.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from urllib.parse import quote
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel


UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
NO_DESCRIPTION = "No description available"
NOT_FOR_SALE = "Not for sale"

AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=e50914&color=fff"


class ReadingStatus(str, Enum):
    """Reading state of a bucket-list entry."""

    PLANNED = "planned"
    READING = "reading"
    COMPLETED = "completed"


class MoodTag(str, Enum):
    """Fixed vocabulary of moods a review can be tagged with."""

    EMOTIONAL = "emotional"
    DARK = "dark"
    HOPEFUL = "hopeful"
    ADVENTUROUS = "adventurous"
    ROMANTIC = "romantic"
    MYSTERIOUS = "mysterious"
    INSPIRING = "inspiring"
    THRILLING = "thrilling"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def date_to_datetime(value: date) -> datetime:
    """Midnight UTC of a calendar day."""
    if isinstance(value, datetime):
        return as_utc(value)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


class DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """JSON-compatible dict keyed the way the user document stores it."""
        return self.model_dump(mode="json", by_alias=True)


class Book(DocumentModel):
    """Canonical catalog book. Immutable once fetched."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = UNKNOWN_TITLE
    authors: list[str] = Field(default_factory=lambda: [UNKNOWN_AUTHOR])
    description: str = NO_DESCRIPTION
    published_date: str = ""
    page_count: int = Field(default=0, ge=0)
    categories: list[str] = Field(default_factory=list)
    average_rating: float = Field(default=0, ge=0, le=5)
    ratings_count: int = Field(default=0, ge=0)
    image_links: dict[str, str] = Field(default_factory=dict)
    language: str = "en"
    publisher: str = ""
    isbn: str = ""
    preview_link: str = ""
    info_link: str = ""
    buy_link: str = ""
    price: str = NOT_FOR_SALE

    @field_validator("title")
    @classmethod
    def default_title(cls, v: str) -> str:
        return v.strip() or UNKNOWN_TITLE

    @field_validator("authors")
    @classmethod
    def default_authors(cls, v: list[str]) -> list[str]:
        authors = [a for a in v if a and a.strip()]
        return authors or [UNKNOWN_AUTHOR]

    def book_fields(self) -> dict:
        """Only the catalog fields, without any tracking data a subclass adds."""
        return self.model_dump(include=set(Book.model_fields))


class BucketListEntry(Book):
    """A book on a user's bucket list together with its reading status."""

    status: ReadingStatus = ReadingStatus.PLANNED
    added_date: datetime = Field(default_factory=utcnow)

    @field_validator("added_date")
    @classmethod
    def _utc_added(cls, v: datetime) -> datetime:
        return as_utc(v)

    @classmethod
    def from_book(
        cls,
        book: Book,
        status: ReadingStatus = ReadingStatus.PLANNED,
        added_date: datetime | None = None,
    ) -> "BucketListEntry":
        return cls(**book.book_fields(), status=status, added_date=added_date or utcnow())

    def with_status(self, status: ReadingStatus) -> "BucketListEntry":
        return self.model_copy(update={"status": status})


class ReadingHistoryEntry(Book):
    """Snapshot of a book at the moment it was completed.

    A book read twice appears twice; ``(id, completed_date)`` identifies an
    entry. ``status`` and ``added_date`` are carried over when the snapshot
    was taken from a bucket-list entry.
    """

    completed_date: datetime
    status: Optional[ReadingStatus] = None
    added_date: Optional[datetime] = None

    @field_validator("completed_date", "added_date")
    @classmethod
    def _utc_dates(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    @computed_field
    @property
    def year(self) -> int:
        return self.completed_date.year

    @property
    def entry_key(self) -> tuple[str, datetime]:
        return (self.id, self.completed_date)

    @classmethod
    def from_book(cls, book: Book, completed_date: datetime) -> "ReadingHistoryEntry":
        data = book.book_fields()
        if isinstance(book, (BucketListEntry, ReadingHistoryEntry)):
            data["status"] = book.status
            data["added_date"] = book.added_date
        return cls(**data, completed_date=completed_date)


def _dedupe_moods(tags: list[MoodTag]) -> list[MoodTag]:
    return list(dict.fromkeys(tags))


class ReviewDraft(DocumentModel):
    """Review form as submitted by the reader, validated before it reaches the store."""

    rating: int = Field(..., description="Star rating, 1-5")
    review_text: Optional[str] = None
    mood_tags: list[MoodTag] = Field(default_factory=list)
    reading_date: Optional[date] = None
    personal_notes: Optional[str] = None
    recommendation: Optional[bool] = None

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if v == 0:
            raise ValueError("Please select a rating")
        if not 1 <= v <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {v}")
        return v

    @field_validator("mood_tags")
    @classmethod
    def unique_moods(cls, v: list[MoodTag]) -> list[MoodTag]:
        return _dedupe_moods(v)


class Review(DocumentModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    book_id: str
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    review_text: Optional[str] = None
    mood_tags: list[MoodTag] = Field(default_factory=list)
    reading_date: date = Field(default_factory=lambda: utcnow().date())
    personal_notes: Optional[str] = None
    recommendation: Optional[bool] = None
    created_date: datetime = Field(default_factory=utcnow)

    @field_validator("mood_tags")
    @classmethod
    def unique_moods(cls, v: list[MoodTag]) -> list[MoodTag]:
        return _dedupe_moods(v)

    @field_validator("created_date")
    @classmethod
    def _utc_created(cls, v: datetime) -> datetime:
        return as_utc(v)


class User(DocumentModel):
    id: str
    email: str
    name: str
    favorite_genres: list[str]
    avatar: str = ""
    join_date: datetime = Field(default_factory=utcnow)

    @field_validator("favorite_genres")
    @classmethod
    def require_genres(cls, v: list[str]) -> list[str]:
        genres = list(dict.fromkeys(g.strip() for g in v if g and g.strip()))
        if not genres:
            raise ValueError("Please select at least one favorite genre")
        return genres

    @model_validator(mode="after")
    def default_avatar(self) -> "User":
        if not self.avatar:
            self.avatar = AVATAR_URL.format(name=quote(self.name, safe=""))
        return self


class UserDocument(DocumentModel):
    """Everything stored for one user, keyed by the user's id."""

    bucket_list: list[BucketListEntry] = Field(default_factory=list)
    reading_history: list[ReadingHistoryEntry] = Field(default_factory=list)
    reviews: dict[str, Review] = Field(default_factory=dict)
    currently_reading: list[BucketListEntry] = Field(default_factory=list)


DOCUMENT_FIELDS = tuple(UserDocument.model_fields)
