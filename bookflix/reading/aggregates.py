"""Read-time views over a user's reading data: diary feed, stats and per-year counts.

Everything here is a pure function of the collections passed in and is
recomputed on every call.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable, Literal, Mapping, Optional

from .models import (
    Book,
    BucketListEntry,
    DocumentModel,
    ReadingHistoryEntry,
    ReadingStatus,
    Review,
    utcnow,
)

FEED_SECTION_SIZE = 10
FEED_LIMIT = 20
HISTORY_GENRE_LIMIT = 10

ActivityType = Literal["review", "completed", "reading"]


class ActivityItem(DocumentModel):
    id: str
    type: ActivityType
    date: datetime
    book: Book
    review: Optional[Review] = None


class ReadingStats(DocumentModel):
    this_year_books: int
    total_books: int
    currently_reading: int
    want_to_read: int


class YearCount(DocumentModel):
    year: int
    count: int
    bar_width: float


class ReviewedBook(DocumentModel):
    review: Review
    book: Book


class HistorySummary(DocumentModel):
    total_books: int
    this_year_books: int
    years: list[int]
    genres: list[str]
    favorite_genre: str
    reading_since: Optional[int] = None


def find_book(
    book_id: str,
    bucket_list: Iterable[BucketListEntry],
    reading_history: Iterable[ReadingHistoryEntry],
) -> Book | None:
    """First book with ``book_id``, looking in the bucket list before the history."""
    for book in bucket_list:
        if book.id == book_id:
            return book
    for book in reading_history:
        if book.id == book_id:
            return book
    return None


def recent_activity(
    bucket_list: list[BucketListEntry],
    reading_history: list[ReadingHistoryEntry],
    reviews: Mapping[str, Review],
    limit: int = FEED_LIMIT,
) -> list[ActivityItem]:
    """Diary feed: latest reviews, latest completions and books being read, newest first.

    Reviews of books found in neither collection are left out.
    """
    items: list[ActivityItem] = []

    latest_reviews = sorted(reviews.values(), key=lambda r: r.created_date)[-FEED_SECTION_SIZE:]
    for review in latest_reviews:
        book = find_book(review.book_id, bucket_list, reading_history)
        if book is None:
            continue
        items.append(
            ActivityItem(
                id=f"review-{review.id}",
                type="review",
                date=review.created_date,
                book=book,
                review=review,
            )
        )

    for entry in reading_history[-FEED_SECTION_SIZE:]:
        items.append(
            ActivityItem(
                id=f"completed-{entry.id}-{entry.completed_date.isoformat()}",
                type="completed",
                date=entry.completed_date,
                book=entry,
            )
        )

    for entry in entries_with_status(bucket_list, ReadingStatus.READING):
        items.append(
            ActivityItem(
                id=f"reading-{entry.id}",
                type="reading",
                date=entry.added_date,
                book=entry,
            )
        )

    items.sort(key=lambda item: item.date, reverse=True)
    return items[:limit]


def entries_with_status(
    bucket_list: Iterable[BucketListEntry], status: ReadingStatus | str
) -> list[BucketListEntry]:
    status = ReadingStatus(status)
    return [entry for entry in bucket_list if entry.status is status]


def reading_stats(
    bucket_list: list[BucketListEntry],
    reading_history: list[ReadingHistoryEntry],
    now: datetime | None = None,
) -> ReadingStats:
    current_year = (now or utcnow()).year
    return ReadingStats(
        this_year_books=sum(1 for e in reading_history if e.completed_date.year == current_year),
        total_books=len(reading_history),
        currently_reading=len(entries_with_status(bucket_list, ReadingStatus.READING)),
        want_to_read=len(entries_with_status(bucket_list, ReadingStatus.PLANNED)),
    )


def yearly_counts(reading_history: Iterable[ReadingHistoryEntry]) -> dict[int, int]:
    return dict(Counter(entry.completed_date.year for entry in reading_history))


def yearly_breakdown(reading_history: Iterable[ReadingHistoryEntry]) -> list[YearCount]:
    """Books completed per year, newest year first.

    ``bar_width`` is the year's count as a percentage of the busiest year, so
    the busiest year is always 100.
    """
    counts = yearly_counts(reading_history)
    if not counts:
        return []
    busiest = max(counts.values())
    return [
        YearCount(year=year, count=count, bar_width=count / busiest * 100)
        for year, count in sorted(counts.items(), reverse=True)
    ]


def reviews_with_books(
    reviews: Mapping[str, Review],
    bucket_list: list[BucketListEntry],
    reading_history: list[ReadingHistoryEntry],
) -> list[ReviewedBook]:
    """Pair each review with its book; reviews of unknown books are skipped."""
    reviewed: list[ReviewedBook] = []
    for review in reviews.values():
        book = find_book(review.book_id, bucket_list, reading_history)
        if book is not None:
            reviewed.append(ReviewedBook(review=review, book=book))
    return reviewed


def bucket_list_for_year(
    bucket_list: Iterable[BucketListEntry], year: int | None = None
) -> list[BucketListEntry]:
    """Entries added during ``year``; all entries when ``year`` is None."""
    if year is None:
        return list(bucket_list)
    return [entry for entry in bucket_list if entry.added_date.year == year]


def filter_history(
    reading_history: Iterable[ReadingHistoryEntry],
    year: int | None = None,
    genre: str | None = None,
) -> list[ReadingHistoryEntry]:
    return [
        entry
        for entry in reading_history
        if (year is None or entry.year == year) and (genre is None or genre in entry.categories)
    ]


def history_summary(
    reading_history: list[ReadingHistoryEntry],
    now: datetime | None = None,
) -> HistorySummary:
    current_year = (now or utcnow()).year
    years = sorted({entry.year for entry in reading_history}, reverse=True)
    genres = list(
        dict.fromkeys(category for entry in reading_history for category in entry.categories)
    )[:HISTORY_GENRE_LIMIT]
    return HistorySummary(
        total_books=len(reading_history),
        this_year_books=sum(1 for entry in reading_history if entry.year == current_year),
        years=years,
        genres=genres,
        favorite_genre=genres[0] if genres else "None",
        reading_since=min(years) if years else None,
    )
