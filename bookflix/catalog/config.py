"""Configuration for the Google Books catalog client."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1/volumes"


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw!r} is not a number") from None


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw!r} is not an integer") from None


@dataclass
class CatalogConfig:
    """Configuration for the catalog search API.

    Attributes:
        base_url: Volumes endpoint of the Google Books API
        api_key: Optional API key, sent as the ``key`` query parameter
        timeout: Per-request timeout in seconds
        max_concurrency: Seed queries resolved in parallel when assembling
            curated shelves
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    timeout: float = 10.0
    max_concurrency: int = 4

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Load configuration from environment variables.

        Environment variables:
            GOOGLE_BOOKS_URL: Volumes endpoint
            GOOGLE_BOOKS_API_KEY: Optional API key
            GOOGLE_BOOKS_TIMEOUT: Request timeout in seconds
            CATALOG_MAX_CONCURRENCY: Parallel seed queries for curated shelves
        """
        return cls(
            base_url=os.getenv("GOOGLE_BOOKS_URL", DEFAULT_BASE_URL).strip().rstrip("/"),
            api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            timeout=_parse_float("GOOGLE_BOOKS_TIMEOUT", os.getenv("GOOGLE_BOOKS_TIMEOUT", "10")),
            max_concurrency=_parse_int(
                "CATALOG_MAX_CONCURRENCY", os.getenv("CATALOG_MAX_CONCURRENCY", "4")
            ),
        )

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
