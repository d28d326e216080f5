"""Google Books catalog: search client, book normalizer and shelf assembly."""

from .assembler import (
    Shelf,
    assemble_curated,
    assemble_curated_async,
    curated_books,
    curated_comics,
    home_shelves,
    merge_unique,
    mood_shelves,
    popular_by_category,
    publisher_shelf,
    superhero_comics,
    superhero_shelf,
    trending_books,
    unique_by_id,
)
from .client import GoogleBooksClient, SearchResult, get_catalog_client, reset_client
from .config import CatalogConfig
from .filters import BookFilters, filter_books
from .normalize import format_book, resolve_image_url

__all__ = [
    # Config
    "CatalogConfig",
    # Client
    "GoogleBooksClient",
    "SearchResult",
    "get_catalog_client",
    "reset_client",
    # Normalizer
    "format_book",
    "resolve_image_url",
    # Assembly
    "Shelf",
    "assemble_curated",
    "assemble_curated_async",
    "curated_books",
    "curated_comics",
    "home_shelves",
    "merge_unique",
    "mood_shelves",
    "popular_by_category",
    "publisher_shelf",
    "superhero_comics",
    "superhero_shelf",
    "trending_books",
    "unique_by_id",
    # Filters
    "BookFilters",
    "filter_books",
]
