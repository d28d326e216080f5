"""Configuration for the user-document storage backend."""

import os
from dataclasses import dataclass
from typing import Literal, Optional

StorageMode = Literal["memory", "local", "database"]

_MODES = ("memory", "local", "database")


@dataclass
class StorageConfig:
    """Where per-user reading documents are kept.

    Attributes:
        mode: 'memory' (process-local), 'local' (one JSON file per user)
            or 'database' (SQLAlchemy ``user_documents`` table)
        path: Directory for local mode
        database_url: SQLAlchemy URL for database mode. When None the URL
            is resolved by ``bookflix.db.session``.
    """

    mode: StorageMode = "memory"
    path: str = "./bookflix_data"
    database_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StorageConfig":
        """Load configuration from environment variables.

        Environment variables:
            BOOKFLIX_STORAGE_MODE: 'memory', 'local' or 'database'
            BOOKFLIX_STORAGE_PATH: Directory for local mode
            DATABASE_URL: Database URL for database mode
        """
        mode = os.getenv("BOOKFLIX_STORAGE_MODE", "memory").strip().lower()
        if mode not in _MODES:
            raise ValueError(
                f"Invalid BOOKFLIX_STORAGE_MODE: {mode}. Must be one of {', '.join(_MODES)}"
            )
        return cls(
            mode=mode,  # type: ignore[arg-type]
            path=os.getenv("BOOKFLIX_STORAGE_PATH", "./bookflix_data"),
            database_url=os.getenv("DATABASE_URL") or None,
        )

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.mode not in _MODES:
            raise ValueError(f"Invalid mode: {self.mode}")
        if self.mode == "local" and not self.path:
            raise ValueError("Path is required for local mode")
        if self.database_url is not None and not self.database_url.strip():
            raise ValueError("DATABASE_URL cannot be blank when provided")
