"""Client-side refinement of a fetched book list (genre explorer filters)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from bookflix.reading.models import Book

BookLength = Literal["short", "medium", "long"]

SHORT_MAX_PAGES = 200
MEDIUM_MAX_PAGES = 400


def length_of(book: Book) -> BookLength:
    if book.page_count <= SHORT_MAX_PAGES:
        return "short"
    if book.page_count <= MEDIUM_MAX_PAGES:
        return "medium"
    return "long"


@dataclass
class BookFilters:
    """Unset fields do not filter.

    Attributes:
        query: Case-insensitive substring of the title or of any author
        language: Exact language code, e.g. 'en'
        min_rating: Lowest accepted average rating
        length: Page-count bucket
    """

    query: Optional[str] = None
    language: Optional[str] = None
    min_rating: Optional[float] = None
    length: Optional[BookLength] = None

    def matches(self, book: Book) -> bool:
        if self.query:
            needle = self.query.strip().lower()
            haystack = [book.title, *book.authors]
            if needle and not any(needle in text.lower() for text in haystack):
                return False
        if self.language and book.language != self.language:
            return False
        if self.min_rating is not None and book.average_rating < self.min_rating:
            return False
        if self.length and length_of(book) != self.length:
            return False
        return True


def filter_books(books: Iterable[Book], filters: BookFilters | None = None) -> list[Book]:
    if filters is None:
        return list(books)
    return [book for book in books if filters.matches(book)]
