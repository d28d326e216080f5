"""Google Books search client with a process-wide singleton.

The catalog is treated as unreliable: every method degrades to an empty
result (or ``None``) on HTTP errors, timeouts and malformed responses, and
logs a warning instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from bookflix.reading.models import Book

from .config import CatalogConfig
from .curation import category_query, mood_query, publisher_query
from .normalize import format_book

logger = logging.getLogger(__name__)

MAX_RESULTS_LIMIT = 40
MOOD_RESULTS = 12
PUBLISHER_RESULTS = 15


@dataclass
class SearchResult:
    books: list[Book] = field(default_factory=list)
    total_items: int = 0


class GoogleBooksClient:
    def __init__(
        self,
        config: CatalogConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or CatalogConfig()
        self.config.validate()
        self.session = session or requests.Session()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> Optional[dict]:
        params = dict(params or {})
        if self.config.api_key:
            params["key"] = self.config.api_key
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Catalog request to %s failed: %s", url, e)
            return None
        except ValueError:
            logger.warning("Invalid JSON response from %s", url)
            return None
        if not isinstance(data, dict):
            logger.warning("Unexpected response shape from %s", url)
            return None
        return data

    def _format(self, item: dict) -> Optional[Book]:
        try:
            return format_book(item)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping malformed catalog item %r: %s", item.get("id"), e)
            return None

    def search(self, query: str, max_results: int = 20, start_index: int = 0) -> SearchResult:
        """Free-text search ordered by relevance, books only."""
        max_results = min(max(int(max_results), 1), MAX_RESULTS_LIMIT)
        data = self._get(
            self.config.base_url,
            {
                "q": query,
                "maxResults": max_results,
                "startIndex": max(int(start_index), 0),
                "printType": "books",
                "orderBy": "relevance",
            },
        )
        if data is None:
            return SearchResult()

        books = []
        for item in data.get("items") or []:
            if not isinstance(item, dict) or not item.get("id"):
                continue
            book = self._format(item)
            if book is not None:
                books.append(book)
        try:
            total_items = max(int(data.get("totalItems") or 0), 0)
        except (TypeError, ValueError):
            total_items = 0
        logger.debug("Search %r returned %d of %d books", query, len(books), total_items)
        return SearchResult(books=books, total_items=total_items)

    def get_by_id(self, book_id: str) -> Optional[Book]:
        data = self._get(f"{self.config.base_url}/{book_id}")
        if data is None or not data.get("id"):
            return None
        return self._format(data)

    def books_by_category(self, category: str, max_results: int = 20) -> SearchResult:
        return self.search(category_query(category), max_results)

    def books_by_mood(self, mood: str) -> SearchResult:
        return self.search(mood_query(mood), MOOD_RESULTS)

    def comics_by_publisher(self, publisher: str) -> SearchResult:
        return self.search(publisher_query(publisher), PUBLISHER_RESULTS)

    def close(self) -> None:
        self.session.close()


# Global client instance for singleton pattern
_client_instance: Optional[GoogleBooksClient] = None


def get_catalog_client(config: Optional[CatalogConfig] = None) -> GoogleBooksClient:
    """Get the shared catalog client, creating it from ``config`` (or the environment) once."""
    global _client_instance

    if _client_instance is None:
        _client_instance = GoogleBooksClient(config or CatalogConfig.from_env())
    return _client_instance


def reset_client() -> None:
    """Close and drop the shared client. Mainly for tests."""
    global _client_instance

    if _client_instance is not None:
        _client_instance.close()
    _client_instance = None
