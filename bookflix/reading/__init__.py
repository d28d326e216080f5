"""Reading lists, reading history and reviews.

Example:
    >>> from bookflix.reading import ReadingListStore, MemoryDocumentStore
    >>> store = ReadingListStore(MemoryDocumentStore(), user)
    >>> store.add_to_bucket_list(book).status
    <MutationStatus.PERSISTED: 'persisted'>
"""

from .config import StorageConfig
from .models import (
    Book,
    BucketListEntry,
    MoodTag,
    ReadingHistoryEntry,
    ReadingStatus,
    Review,
    ReviewDraft,
    User,
    UserDocument,
)
from .persistence import (
    DocumentStore,
    LocalFileDocumentStore,
    MemoryDocumentStore,
    SqlDocumentStore,
    create_document_store,
)
from .store import Mutation, MutationStatus, ReadingListStore
from .aggregates import (
    ActivityItem,
    HistorySummary,
    ReadingStats,
    ReviewedBook,
    YearCount,
    bucket_list_for_year,
    entries_with_status,
    filter_history,
    history_summary,
    reading_stats,
    recent_activity,
    reviews_with_books,
    yearly_breakdown,
)

__all__ = [
    # Config
    "StorageConfig",
    # Models
    "Book",
    "BucketListEntry",
    "MoodTag",
    "ReadingHistoryEntry",
    "ReadingStatus",
    "Review",
    "ReviewDraft",
    "User",
    "UserDocument",
    # Persistence
    "DocumentStore",
    "LocalFileDocumentStore",
    "MemoryDocumentStore",
    "SqlDocumentStore",
    "create_document_store",
    # Store
    "Mutation",
    "MutationStatus",
    "ReadingListStore",
    # Aggregates
    "ActivityItem",
    "HistorySummary",
    "ReadingStats",
    "ReviewedBook",
    "YearCount",
    "bucket_list_for_year",
    "entries_with_status",
    "filter_history",
    "history_summary",
    "reading_stats",
    "recent_activity",
    "reviews_with_books",
    "yearly_breakdown",
]
