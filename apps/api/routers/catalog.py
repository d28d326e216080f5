from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bookflix.catalog import (
    BookFilters,
    GoogleBooksClient,
    curated_books,
    curated_comics,
    filter_books,
    home_shelves,
    mood_shelves,
    popular_by_category,
    publisher_shelf,
    superhero_shelf,
    trending_books,
)
from bookflix.catalog.curation import CURATED_BOOK_QUERIES, CURATED_COMIC_QUERIES
from bookflix.catalog.filters import BookLength

from ..core.deps import get_catalog
from ..core.serialize import serialize_book, serialize_books, serialize_shelf
from ..core.shelves import any_books, cached_shelf
from ..schemas.book import SearchResultOut, ShelfOut

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _filters(
    q: str | None,
    language: str | None,
    min_rating: float | None,
    length: BookLength | None,
) -> BookFilters | None:
    if q is None and language is None and min_rating is None and length is None:
        return None
    return BookFilters(query=q, language=language, min_rating=min_rating, length=length)


@router.get("/search", response_model=SearchResultOut)
def search_books(
    q: str = Query(..., min_length=1),
    max_results: int = Query(20, alias="maxResults", ge=1, le=40),
    start_index: int = Query(0, alias="startIndex", ge=0),
    catalog: GoogleBooksClient = Depends(get_catalog),
):
    result = catalog.search(q, max_results, start_index)
    return {"books": serialize_books(result.books), "totalItems": result.total_items}


@router.get("/books/{book_id}")
def get_book(book_id: str, catalog: GoogleBooksClient = Depends(get_catalog)):
    book = catalog.get_by_id(book_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return serialize_book(book)


@router.get("/categories/{category}")
def get_category(
    category: str,
    max_results: int = Query(20, alias="maxResults", ge=1, le=40),
    q: str | None = None,
    language: str | None = None,
    min_rating: float | None = Query(None, alias="minRating", ge=0, le=5),
    length: BookLength | None = None,
    catalog: GoogleBooksClient = Depends(get_catalog),
):
    books = catalog.books_by_category(category, max_results).books
    return serialize_books(filter_books(books, _filters(q, language, min_rating, length)))


@router.get("/moods/{mood}")
def get_mood(mood: str, catalog: GoogleBooksClient = Depends(get_catalog)):
    books = cached_shelf(("mood", mood), lambda: catalog.books_by_mood(mood).books)
    return serialize_books(books)


@router.get("/curated/{category}")
def get_curated(category: str, catalog: GoogleBooksClient = Depends(get_catalog)):
    if category not in CURATED_BOOK_QUERIES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown category")
    books = cached_shelf(("curated", category), lambda: curated_books(category, catalog))
    return serialize_books(books)


@router.get("/comics/superhero")
def get_superhero_comics(catalog: GoogleBooksClient = Depends(get_catalog)):
    books = cached_shelf(("comics", "superhero"), lambda: superhero_shelf(catalog))
    return serialize_books(books)


@router.get("/comics/{publisher}/curated")
def get_curated_comics(publisher: str, catalog: GoogleBooksClient = Depends(get_catalog)):
    if publisher not in CURATED_COMIC_QUERIES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown publisher")
    books = cached_shelf(("curated-comics", publisher), lambda: curated_comics(publisher, catalog))
    return serialize_books(books)


@router.get("/comics/{publisher}")
def get_publisher_comics(publisher: str, catalog: GoogleBooksClient = Depends(get_catalog)):
    books = cached_shelf(("comics", publisher), lambda: publisher_shelf(publisher, catalog))
    return serialize_books(books)


@router.get("/trending")
def get_trending(catalog: GoogleBooksClient = Depends(get_catalog)):
    books = cached_shelf(("trending",), lambda: trending_books(catalog))
    return serialize_books(books)


@router.get("/popular", response_model=list[ShelfOut])
def get_popular(catalog: GoogleBooksClient = Depends(get_catalog)):
    shelves = cached_shelf(
        ("popular",),
        lambda: list(popular_by_category(catalog).values()),
        keep=any_books,
    )
    return [serialize_shelf(shelf) for shelf in shelves]


@router.get("/home")
def get_home(catalog: GoogleBooksClient = Depends(get_catalog)):
    """Home screen: trending row, curated category shelves and mood shelves."""
    trending = cached_shelf(("trending",), lambda: trending_books(catalog))
    shelves = cached_shelf(("home",), lambda: home_shelves(catalog), keep=any_books)
    moods = cached_shelf(("home-moods",), lambda: mood_shelves(catalog), keep=any_books)
    logger.debug("Home screen: %d trending, %d shelves", len(trending), len(shelves))
    return {
        "trending": serialize_books(trending),
        "shelves": [serialize_shelf(shelf) for shelf in shelves],
        "moods": [serialize_shelf(shelf) for shelf in moods],
    }
