"""Mapping of raw Google Books volumes onto the canonical ``Book``."""

from __future__ import annotations

import math
from typing import Any, Mapping

from bookflix.reading.models import (
    NO_DESCRIPTION,
    NOT_FOR_SALE,
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    Book,
)

IMAGE_SIZES = ("thumbnail", "small", "medium", "large", "extraLarge")


def resolve_image_url(image_links: Mapping[str, str] | None, size: str) -> str:
    """Cover URL for ``size``, falling back to the thumbnails.

    Non-empty URLs are upgraded to https and asked for a larger zoom.
    """
    if not image_links:
        return ""
    url = image_links.get(size) or image_links.get("thumbnail") or image_links.get("smallThumbnail") or ""
    if not url:
        return ""
    if url.startswith("http:"):
        url = "https:" + url[len("http:"):]
    return (
        url.replace("&edge=curl", "")
        .replace("zoom=1", "zoom=2")
        .replace("&source=gbs_api", "&source=gbs_api&fife=w400-h600")
    )


def _non_negative_int(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(number, 0)


def _rating(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return min(max(number, 0.0), 5.0)


def _text(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value).strip() or default


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [text for text in (_text(v) for v in value) if text]


def _isbn(identifiers: Any) -> str:
    if not isinstance(identifiers, list):
        return ""
    for identifier in identifiers:
        if isinstance(identifier, Mapping):
            return _text(identifier.get("identifier"))
    return ""


def _price(sale_info: Mapping[str, Any]) -> str:
    list_price = _mapping(sale_info.get("listPrice"))
    if not list_price:
        return NOT_FOR_SALE
    return f"{list_price.get('amount')} {list_price.get('currencyCode')}"


def format_book(item: Mapping[str, Any]) -> Book:
    """Build a ``Book`` from one volume of a Google Books response.

    Every field is defaulted and wrongly typed values are treated as missing;
    the only thing required is ``id``.
    """
    volume = _mapping(item.get("volumeInfo"))
    sale_info = _mapping(item.get("saleInfo"))
    raw_images = {
        size: url for size, url in _mapping(volume.get("imageLinks")).items() if isinstance(url, str)
    }

    image_links = {}
    for size in IMAGE_SIZES:
        url = resolve_image_url(raw_images, size)
        if url:
            image_links[size] = url

    return Book(
        id=_text(item.get("id")),
        title=_text(volume.get("title"), UNKNOWN_TITLE),
        authors=_strings(volume.get("authors")) or [UNKNOWN_AUTHOR],
        description=_text(volume.get("description"), NO_DESCRIPTION),
        published_date=_text(volume.get("publishedDate")),
        page_count=_non_negative_int(volume.get("pageCount")),
        categories=_strings(volume.get("categories")),
        average_rating=_rating(volume.get("averageRating")),
        ratings_count=_non_negative_int(volume.get("ratingsCount")),
        image_links=image_links,
        language=_text(volume.get("language"), "en"),
        publisher=_text(volume.get("publisher")),
        isbn=_isbn(volume.get("industryIdentifiers")),
        preview_link=_text(volume.get("previewLink")),
        info_link=_text(volume.get("infoLink")),
        buy_link=_text(sale_info.get("buyLink")),
        price=_price(sale_info),
    )
