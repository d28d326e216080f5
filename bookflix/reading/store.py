"""Reading-list state store for the signed-in user.

The store keeps the user's bucket list, reading history and reviews in
memory and mirrors every change to a ``DocumentStore``. Changes are applied
locally first; the write to the document store follows, inline or on an
executor, and its outcome is reported on the returned ``Mutation``. A failed
write is logged and left as is: local state is not rolled back and nothing
is retried.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Executor
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping

from .models import (
    Book,
    BucketListEntry,
    ReadingHistoryEntry,
    ReadingStatus,
    Review,
    ReviewDraft,
    User,
    UserDocument,
    date_to_datetime,
    utcnow,
)
from .persistence import DocumentStore

logger = logging.getLogger(__name__)


class MutationStatus(str, Enum):
    NOOP = "noop"
    APPLIED = "applied"
    PERSISTED = "persisted"
    PERSIST_FAILED = "persist_failed"


class Mutation:
    """Outcome of one state-store operation.

    ``APPLIED`` means the in-memory state already reflects the change and the
    document write is pending; it then settles on ``PERSISTED`` or
    ``PERSIST_FAILED``. ``NOOP`` operations changed nothing and wrote nothing.
    """

    def __init__(self, operation: str, status: MutationStatus = MutationStatus.APPLIED):
        self.operation = operation
        self.error: Exception | None = None
        self._status = status
        self._settled = threading.Event()
        if status is not MutationStatus.APPLIED:
            self._settled.set()

    @property
    def status(self) -> MutationStatus:
        return self._status

    @property
    def applied(self) -> bool:
        return self._status is not MutationStatus.NOOP

    @property
    def done(self) -> bool:
        return self._settled.is_set()

    def wait(self, timeout: float | None = None) -> MutationStatus:
        """Block until the write settled (or ``timeout`` elapsed) and return the status."""
        self._settled.wait(timeout)
        return self._status

    def _settle(self, status: MutationStatus, error: Exception | None = None) -> None:
        self._status = status
        self.error = error
        self._settled.set()

    def __repr__(self) -> str:
        return f"Mutation({self.operation!r}, status={self._status.value!r})"


class ReadingListStore:
    """In-memory reading state of one user, mirrored to a document store."""

    def __init__(
        self,
        documents: DocumentStore,
        user: User | None = None,
        *,
        executor: Executor | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.documents = documents
        self.executor = executor
        self.clock = clock or utcnow
        self._lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._pending: deque[tuple[Mutation, str, dict[str, Any]]] = deque()
        self._user: User | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._bucket_list: list[BucketListEntry] = []
        self._reading_history: list[ReadingHistoryEntry] = []
        self._reviews: dict[str, Review] = {}
        self._currently_reading: list[BucketListEntry] = []
        if user is not None:
            self.set_user(user)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self._user

    def set_user(self, user: User | None) -> None:
        """Switch to ``user`` (None signs out), loading their document and following live updates."""
        with self._lock:
            if self._unsubscribe is not None:
                self._unsubscribe()
                self._unsubscribe = None
            self._user = user
            self._load(UserDocument())

        if user is None:
            return

        try:
            document = self.documents.read(user.id)
        except Exception:
            logger.exception("Failed to load reading data for user %s", user.id)
            document = UserDocument()

        with self._lock:
            if self._user is not user:
                return
            self._load(document)
            self._unsubscribe = self.documents.subscribe(user.id, self._on_remote_update)

    def close(self) -> None:
        self.set_user(None)

    def _on_remote_update(self, document: UserDocument, origin: Any) -> None:
        if origin is self:
            return
        with self._lock:
            if self._user is not None:
                self._load(document)

    def _load(self, document: UserDocument) -> None:
        self._bucket_list = list(document.bucket_list)
        self._reading_history = list(document.reading_history)
        self._reviews = dict(document.reviews)
        self._currently_reading = list(document.currently_reading)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def bucket_list(self) -> list[BucketListEntry]:
        with self._lock:
            return list(self._bucket_list)

    @property
    def reading_history(self) -> list[ReadingHistoryEntry]:
        with self._lock:
            return list(self._reading_history)

    @property
    def reviews(self) -> dict[str, Review]:
        with self._lock:
            return dict(self._reviews)

    @property
    def currently_reading(self) -> list[BucketListEntry]:
        with self._lock:
            return list(self._currently_reading)

    def snapshot(self) -> UserDocument:
        with self._lock:
            return UserDocument(
                bucket_list=list(self._bucket_list),
                reading_history=list(self._reading_history),
                reviews=dict(self._reviews),
                currently_reading=list(self._currently_reading),
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _find_entry(self, book_id: str) -> BucketListEntry | None:
        return next((entry for entry in self._bucket_list if entry.id == book_id), None)

    def is_in_bucket_list(self, book_id: str) -> bool:
        with self._lock:
            return self._find_entry(book_id) is not None

    def get_book_status(self, book_id: str) -> ReadingStatus | None:
        with self._lock:
            entry = self._find_entry(book_id)
            return entry.status if entry else None

    def get_book_review(self, book_id: str) -> Review | None:
        with self._lock:
            return self._reviews.get(book_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_bucket_list(
        self,
        book: Book,
        status: ReadingStatus | str = ReadingStatus.PLANNED,
    ) -> Mutation:
        """Add ``book`` with ``status``. Adding a book that is already listed is a no-op."""
        status = ReadingStatus(status)
        with self._lock:
            if self._user is None:
                return Mutation("add_to_bucket_list", MutationStatus.NOOP)
            user_id = self._user.id
            if self._find_entry(book.id) is not None:
                logger.debug("Book %s already in bucket list of %s", book.id, self._user.id)
                return Mutation("add_to_bucket_list", MutationStatus.NOOP)
            entry = BucketListEntry.from_book(book, status=status, added_date=self.clock())
            self._bucket_list = [*self._bucket_list, entry]
            fields = self._bucket_fields()
            mutation = self._queue_write("add_to_bucket_list", user_id, fields)
        return self._flush(mutation)

    def update_book_status(self, book_id: str, new_status: ReadingStatus | str) -> Mutation:
        """Set the status of a listed book.

        Every transition into ``completed`` appends a reading-history entry,
        including a repeated ``completed -> completed``.
        """
        new_status = ReadingStatus(new_status)
        with self._lock:
            if self._user is None:
                return Mutation("update_book_status", MutationStatus.NOOP)
            user_id = self._user.id
            index = next(
                (i for i, entry in enumerate(self._bucket_list) if entry.id == book_id), None
            )
            if index is None:
                return Mutation("update_book_status", MutationStatus.NOOP)

            updated = self._bucket_list[index].with_status(new_status)
            bucket_list = list(self._bucket_list)
            bucket_list[index] = updated
            self._bucket_list = bucket_list
            fields = self._bucket_fields()

            if new_status is ReadingStatus.COMPLETED:
                history_entry = ReadingHistoryEntry.from_book(updated, completed_date=self.clock())
                self._reading_history = [*self._reading_history, history_entry]
                fields["reading_history"] = list(self._reading_history)
            mutation = self._queue_write("update_book_status", user_id, fields)
        return self._flush(mutation)

    def add_to_reading_history(self, book: Book, completed_date: datetime | None = None) -> Mutation:
        with self._lock:
            if self._user is None:
                return Mutation("add_to_reading_history", MutationStatus.NOOP)
            user_id = self._user.id
            entry = ReadingHistoryEntry.from_book(book, completed_date=completed_date or self.clock())
            self._reading_history = [*self._reading_history, entry]
            fields = {"reading_history": list(self._reading_history)}
            mutation = self._queue_write("add_to_reading_history", user_id, fields)
        return self._flush(mutation)

    def add_review(self, book_id: str, review_data: ReviewDraft | Mapping[str, Any]) -> Mutation:
        """Store the user's review of ``book_id``, replacing any earlier one.

        When the review carries a recommendation, the book has no history
        entry yet and it is on the bucket list, a history entry is back-filled
        with the review's reading date (or now) as completion date.
        """
        draft = (
            review_data
            if isinstance(review_data, ReviewDraft)
            else ReviewDraft.model_validate(review_data)
        )
        with self._lock:
            if self._user is None:
                return Mutation("add_review", MutationStatus.NOOP)
            user_id = self._user.id
            now = self.clock()
            review_fields = draft.model_dump(exclude_none=True)
            review_fields.setdefault("reading_date", now.date())
            review = Review(
                book_id=book_id,
                user_id=self._user.id,
                created_date=now,
                **review_fields,
            )
            self._reviews = {**self._reviews, book_id: review}
            fields: dict[str, Any] = {"reviews": dict(self._reviews)}

            in_history = any(entry.id == book_id for entry in self._reading_history)
            if not in_history and draft.recommendation is not None:
                entry = self._find_entry(book_id)
                if entry is not None:
                    completed = date_to_datetime(draft.reading_date) if draft.reading_date else now
                    history_entry = ReadingHistoryEntry.from_book(entry, completed_date=completed)
                    self._reading_history = [*self._reading_history, history_entry]
                    fields["reading_history"] = list(self._reading_history)
            mutation = self._queue_write("add_review", user_id, fields)
        return self._flush(mutation)

    def remove_from_bucket_list(self, book_id: str) -> Mutation:
        """Drop ``book_id`` from the bucket list; history and reviews are kept."""
        with self._lock:
            if self._user is None:
                return Mutation("remove_from_bucket_list", MutationStatus.NOOP)
            user_id = self._user.id
            remaining = [entry for entry in self._bucket_list if entry.id != book_id]
            if len(remaining) == len(self._bucket_list):
                return Mutation("remove_from_bucket_list", MutationStatus.NOOP)
            self._bucket_list = remaining
            fields = self._bucket_fields()
            mutation = self._queue_write("remove_from_bucket_list", user_id, fields)
        return self._flush(mutation)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _bucket_fields(self) -> dict[str, Any]:
        self._currently_reading = [
            entry for entry in self._bucket_list if entry.status is ReadingStatus.READING
        ]
        return {
            "bucket_list": list(self._bucket_list),
            "currently_reading": list(self._currently_reading),
        }

    def _queue_write(self, operation: str, user_id: str, fields: dict[str, Any]) -> Mutation:
        """Queue a document write. Call with ``_lock`` held so writes keep mutation order."""
        mutation = Mutation(operation)
        self._pending.append((mutation, user_id, fields))
        return mutation

    def _flush(self, mutation: Mutation) -> Mutation:
        if self.executor is None:
            self._drain()
        else:
            self.executor.submit(self._drain)
        return mutation

    def _drain(self) -> None:
        """Write queued snapshots oldest first, one at a time.

        Every snapshot holds whole collections, so a later one must never be
        overwritten by an earlier one landing after it.
        """
        with self._write_lock:
            while True:
                with self._lock:
                    if not self._pending:
                        return
                    mutation, user_id, fields = self._pending.popleft()
                self._write(mutation, user_id, fields)

    def _write(self, mutation: Mutation, user_id: str, fields: dict[str, Any]) -> None:
        try:
            self.documents.merge_update(user_id, fields, origin=self)
        except Exception as e:
            logger.error(
                "Error updating reading data for user %s (%s): %s", user_id, mutation.operation, e
            )
            mutation._settle(MutationStatus.PERSIST_FAILED, e)
        else:
            mutation._settle(MutationStatus.PERSISTED)
