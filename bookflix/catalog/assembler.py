"""Shelf assembly on top of the catalog client.

Curated shelves resolve each seed query to its top search result. Seeds are
fetched in parallel under a semaphore and the results are put back in seed
order; a seed that fails or finds nothing is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Protocol, Sequence

from pydantic import Field

from bookflix.reading.models import Book, DocumentModel

from .client import SearchResult, get_catalog_client
from .curation import (
    CURATED_BOOK_QUERIES,
    CURATED_COMIC_QUERIES,
    HOME_CATEGORIES,
    HOME_MOODS,
    POPULAR_CATEGORIES,
    SUPERHERO_QUERIES,
    TRENDING_QUERIES,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4
TRENDING_PER_QUERY = 4
TRENDING_LIMIT = 20
SUPERHERO_PER_QUERY = 3
SUPERHERO_LIMIT = 18
PUBLISHER_SHELF_LIMIT = 15
POPULAR_PER_CATEGORY = 12


class CatalogClient(Protocol):
    def search(self, query: str, max_results: int = 20, start_index: int = 0) -> SearchResult: ...

    def books_by_category(self, category: str, max_results: int = 20) -> SearchResult: ...

    def books_by_mood(self, mood: str) -> SearchResult: ...

    def comics_by_publisher(self, publisher: str) -> SearchResult: ...


class Shelf(DocumentModel):
    key: str
    name: str
    books: list[Book] = Field(default_factory=list)


def _concurrency(client: CatalogClient, max_concurrency: Optional[int]) -> int:
    if max_concurrency is not None:
        return max(int(max_concurrency), 1)
    config = getattr(client, "config", None)
    return max(int(getattr(config, "max_concurrency", DEFAULT_MAX_CONCURRENCY)), 1)


async def _search_all_async(
    client: CatalogClient,
    queries: Sequence[str],
    max_results: int,
    max_concurrency: int,
) -> list[list[Book]]:
    """Run one search per query; the i-th result list belongs to the i-th query."""
    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch(query: str) -> list[Book]:
        async with semaphore:
            try:
                result = await asyncio.to_thread(client.search, query, max_results)
            except Exception as e:
                logger.warning("Failed to fetch %r: %s", query, e)
                return []
        return list(result.books)

    return await asyncio.gather(*(fetch(query) for query in queries))


def _search_all(
    client: CatalogClient,
    queries: Sequence[str],
    max_results: int,
    max_concurrency: Optional[int] = None,
) -> list[list[Book]]:
    try:
        return asyncio.run(
            _search_all_async(client, queries, max_results, _concurrency(client, max_concurrency))
        )
    except Exception:
        logger.exception("Catalog fan-out failed for %d queries", len(queries))
        return []


async def assemble_curated_async(
    client: CatalogClient,
    queries: Sequence[str],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[Book]:
    """Top result of each seed query, in seed order. Never raises."""
    try:
        results = await _search_all_async(client, queries, 1, max(int(max_concurrency), 1))
    except Exception:
        logger.exception("Curated assembly failed for %d seeds", len(queries))
        return []
    books = []
    for query, found in zip(queries, results):
        if found:
            books.append(found[0])
        else:
            logger.debug("Seed %r resolved to nothing", query)
    return books


def assemble_curated(
    client: CatalogClient,
    queries: Sequence[str],
    max_concurrency: Optional[int] = None,
) -> list[Book]:
    """Blocking variant of ``assemble_curated_async``; call it outside a running event loop."""
    try:
        return asyncio.run(
            assemble_curated_async(client, queries, _concurrency(client, max_concurrency))
        )
    except Exception:
        logger.exception("Curated assembly failed for %d seeds", len(queries))
        return []


def unique_by_id(books: Iterable[Book]) -> list[Book]:
    seen: set[str] = set()
    unique = []
    for book in books:
        if book.id not in seen:
            seen.add(book.id)
            unique.append(book)
    return unique


def merge_unique(
    curated: Sequence[Book],
    supplementary: Iterable[Book],
    limit: Optional[int] = None,
) -> list[Book]:
    """``curated`` followed by the supplementary books whose id it does not contain yet."""
    merged = list(curated)
    seen = {book.id for book in merged}
    for book in supplementary:
        if book.id not in seen:
            seen.add(book.id)
            merged.append(book)
    return merged if limit is None else merged[:limit]


def curated_books(category: str, client: Optional[CatalogClient] = None) -> list[Book]:
    queries = CURATED_BOOK_QUERIES.get(category, [])
    if not queries:
        return []
    return assemble_curated(client or get_catalog_client(), queries)


def curated_comics(publisher: str, client: Optional[CatalogClient] = None) -> list[Book]:
    queries = CURATED_COMIC_QUERIES.get(publisher, [])
    if not queries:
        return []
    return assemble_curated(client or get_catalog_client(), queries)


def trending_books(client: Optional[CatalogClient] = None) -> list[Book]:
    client = client or get_catalog_client()
    results = _search_all(client, TRENDING_QUERIES, TRENDING_PER_QUERY)
    return unique_by_id(book for books in results for book in books)[:TRENDING_LIMIT]


def superhero_comics(client: Optional[CatalogClient] = None) -> list[Book]:
    client = client or get_catalog_client()
    results = _search_all(client, SUPERHERO_QUERIES, SUPERHERO_PER_QUERY)
    return [book for books in results for book in books][:SUPERHERO_LIMIT]


def superhero_shelf(client: Optional[CatalogClient] = None) -> list[Book]:
    client = client or get_catalog_client()
    return merge_unique(
        curated_comics("superhero", client),
        superhero_comics(client),
        limit=SUPERHERO_LIMIT,
    )


def publisher_shelf(publisher: str, client: Optional[CatalogClient] = None) -> list[Book]:
    """Curated comics of ``publisher`` topped up with its publisher search.

    Publishers without a curated list get the plain publisher search.
    """
    client = client or get_catalog_client()
    searched = client.comics_by_publisher(publisher).books
    if publisher not in CURATED_COMIC_QUERIES:
        return list(searched)
    return merge_unique(curated_comics(publisher, client), searched, limit=PUBLISHER_SHELF_LIMIT)


def home_shelves(client: Optional[CatalogClient] = None) -> list[Shelf]:
    client = client or get_catalog_client()
    return [
        Shelf(key=key, name=name, books=curated_books(key, client))
        for key, name in HOME_CATEGORIES.items()
    ]


def mood_shelves(
    client: Optional[CatalogClient] = None,
    moods: Sequence[str] = tuple(HOME_MOODS),
) -> list[Shelf]:
    client = client or get_catalog_client()
    return [
        Shelf(key=mood, name=mood.replace("-", " ").title(), books=client.books_by_mood(mood).books)
        for mood in moods
    ]


def popular_by_category(client: Optional[CatalogClient] = None) -> dict[str, Shelf]:
    client = client or get_catalog_client()
    return {
        key: Shelf(
            key=key,
            name=name,
            books=client.books_by_category(key, POPULAR_PER_CATEGORY).books,
        )
        for key, name in POPULAR_CATEGORIES.items()
    }
