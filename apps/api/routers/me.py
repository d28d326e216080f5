from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bookflix.reading import (
    ReadingListStore,
    ReadingStatus,
    User,
    bucket_list_for_year,
    entries_with_status,
    filter_history,
    history_summary,
    reading_stats,
    recent_activity,
    reviews_with_books,
    yearly_breakdown,
)
from bookflix.reading.models import utcnow

from ..core.deps import get_current_user, get_reading_store
from ..core.serialize import serialize_activity, serialize_books, serialize_mutation, serialize_user
from ..schemas.activity import ActivityItemOut
from ..schemas.bucket import AddToBucketListRequest, BookStatusOut, UpdateStatusRequest
from ..schemas.mutation import MutationOut
from ..schemas.review import CreateReviewRequest
from ..schemas.user import UserOut

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return serialize_user(current_user)


# ---------------------------------------------------------------------------
# Bucket list
# ---------------------------------------------------------------------------


@router.get("/bucket-list")
def get_bucket_list(
    year: int | None = None,
    status_filter: ReadingStatus | None = Query(None, alias="status"),
    store: ReadingListStore = Depends(get_reading_store),
):
    entries = bucket_list_for_year(store.bucket_list, year)
    if status_filter is not None:
        entries = entries_with_status(entries, status_filter)
    return serialize_books(entries)


@router.post("/bucket-list", response_model=MutationOut, status_code=status.HTTP_201_CREATED)
def add_to_bucket_list(
    body: AddToBucketListRequest,
    store: ReadingListStore = Depends(get_reading_store),
):
    return serialize_mutation(store.add_to_bucket_list(body.book, body.status))


@router.get("/bucket-list/{book_id}", response_model=BookStatusOut)
def get_book_status(book_id: str, store: ReadingListStore = Depends(get_reading_store)):
    book_status = store.get_book_status(book_id)
    return {"bookId": book_id, "inBucketList": book_status is not None, "status": book_status}


@router.patch("/bucket-list/{book_id}", response_model=MutationOut)
def update_book_status(
    book_id: str,
    body: UpdateStatusRequest,
    store: ReadingListStore = Depends(get_reading_store),
):
    if not store.is_in_bucket_list(book_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not in bucket list")
    return serialize_mutation(store.update_book_status(book_id, body.status))


@router.delete("/bucket-list/{book_id}", response_model=MutationOut)
def remove_from_bucket_list(book_id: str, store: ReadingListStore = Depends(get_reading_store)):
    return serialize_mutation(store.remove_from_bucket_list(book_id))


# ---------------------------------------------------------------------------
# Reading history
# ---------------------------------------------------------------------------


@router.get("/history")
def get_history(
    year: int | None = None,
    genre: str | None = None,
    store: ReadingListStore = Depends(get_reading_store),
):
    return serialize_books(filter_history(store.reading_history, year=year, genre=genre))


@router.get("/history/summary")
def get_history_summary(store: ReadingListStore = Depends(get_reading_store)):
    return history_summary(store.reading_history, now=utcnow()).to_document()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


@router.get("/reviews")
def list_reviews(store: ReadingListStore = Depends(get_reading_store)):
    reviewed = reviews_with_books(store.reviews, store.bucket_list, store.reading_history)
    reviewed.sort(key=lambda r: r.review.created_date, reverse=True)
    return [r.to_document() for r in reviewed]


@router.get("/reviews/{book_id}")
def get_review(book_id: str, store: ReadingListStore = Depends(get_reading_store)):
    review = store.get_book_review(book_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return review.to_document()


@router.put("/reviews/{book_id}", response_model=MutationOut)
def submit_review(
    book_id: str,
    body: CreateReviewRequest,
    store: ReadingListStore = Depends(get_reading_store),
):
    return serialize_mutation(store.add_review(book_id, body))


# ---------------------------------------------------------------------------
# Diary and statistics
# ---------------------------------------------------------------------------


@router.get("/activity", response_model=list[ActivityItemOut])
def get_activity(
    limit: int = Query(20, ge=1, le=50),
    store: ReadingListStore = Depends(get_reading_store),
):
    snapshot = store.snapshot()
    items = recent_activity(
        snapshot.bucket_list,
        snapshot.reading_history,
        snapshot.reviews,
        limit=limit,
    )
    return [serialize_activity(item) for item in items]


@router.get("/stats")
def get_stats(store: ReadingListStore = Depends(get_reading_store)):
    snapshot = store.snapshot()
    return reading_stats(snapshot.bucket_list, snapshot.reading_history, now=utcnow()).to_document()


@router.get("/stats/yearly")
def get_yearly(store: ReadingListStore = Depends(get_reading_store)):
    return [year.to_document() for year in yearly_breakdown(store.reading_history)]
