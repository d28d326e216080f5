"""Fake catalog client and raw-volume factories for the catalog tests."""

import threading

from bookflix.catalog import SearchResult
from bookflix.reading import Book


def make_volume(volume_id="v1", **volume_info):
    return {"id": volume_id, "volumeInfo": volume_info}


def make_book(book_id, title=None):
    return Book(id=book_id, title=title or f"Book {book_id}")


class FakeCatalog:
    """In-memory stand-in for GoogleBooksClient.

    ``results`` maps a query to the books it returns; a query mapped to an
    exception raises it instead.
    """

    def __init__(self, results=None, max_concurrency=4, by_id=None):
        self.results = dict(results or {})
        self.by_id = dict(by_id or {})
        self.calls = []
        self._lock = threading.Lock()

        class _Config:
            pass

        self.config = _Config()
        self.config.max_concurrency = max_concurrency

    def search(self, query, max_results=20, start_index=0):
        with self._lock:
            self.calls.append((query, max_results))
        found = self.results.get(query, [])
        if isinstance(found, Exception):
            raise found
        return SearchResult(books=list(found)[:max_results], total_items=len(found))

    def books_by_category(self, category, max_results=20):
        return self.search(f"category:{category}", max_results)

    def books_by_mood(self, mood):
        return self.search(f"mood:{mood}", 12)

    def comics_by_publisher(self, publisher):
        return self.search(f"publisher:{publisher}", 15)

    def get_by_id(self, book_id):
        return self.by_id.get(book_id)
