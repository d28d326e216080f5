from __future__ import annotations

import threading
from typing import Callable, Hashable, Iterable, TypeVar

from cachetools import TTLCache

from bookflix.catalog import Shelf

from .config import settings

T = TypeVar("T")

_shelf_cache: TTLCache | None = None
_cache_lock = threading.Lock()


def _get_cache() -> TTLCache:
    global _shelf_cache
    if _shelf_cache is None:
        _shelf_cache = TTLCache(maxsize=256, ttl=settings.SHELF_CACHE_TTL_SECONDS)
    return _shelf_cache


def any_books(shelves: Iterable[Shelf]) -> bool:
    return any(shelf.books for shelf in shelves)


def cached_shelf(
    key: Hashable,
    build: Callable[[], T],
    keep: Callable[[T], bool] = bool,
) -> T:
    """Return the cached value for ``key`` or build it.

    A built value is cached only when ``keep(value)`` holds, so an empty
    result from a catalog outage does not stick for a whole TTL. Lists of
    shelves pass ``keep=any_books``.
    """
    if settings.SHELF_CACHE_TTL_SECONDS <= 0:
        return build()

    with _cache_lock:
        cache = _get_cache()
        if key in cache:
            return cache[key]

    value = build()
    if keep(value):
        with _cache_lock:
            cache[key] = value
    return value


def clear_shelf_cache() -> None:
    global _shelf_cache
    with _cache_lock:
        _shelf_cache = None
