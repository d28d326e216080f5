"""Per-user document persistence with live-update subscriptions.

A user document holds ``bucketList``, ``readingHistory``, ``reviews`` and
``currentlyReading``. Writes merge top-level fields only; whichever write
lands last wins for a field. Every successful write is pushed to the
subscribers of that user together with the writer's ``origin`` token.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Mapping

from .config import StorageConfig
from .models import DOCUMENT_FIELDS, UserDocument

logger = logging.getLogger(__name__)

Listener = Callable[[UserDocument, Any], None]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class DocumentStore(ABC):
    """Storage for per-user reading documents."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._listeners_lock = threading.Lock()

    @abstractmethod
    def read(self, user_id: str) -> UserDocument:
        """Return the user's document, empty when nothing was stored yet."""

    @abstractmethod
    def _write(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Merge camelCase ``payload`` into the stored document and return the full raw document."""

    def merge_update(
        self,
        user_id: str,
        fields: Mapping[str, Any],
        origin: Any = None,
    ) -> UserDocument:
        """Merge ``fields`` (snake_case document field names) into the user's document.

        Raises:
            ValueError: If a field name is not part of the document
        """
        unknown = set(fields) - set(DOCUMENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown document fields: {sorted(unknown)}")
        partial = UserDocument.model_validate(dict(fields))
        payload = partial.model_dump(mode="json", by_alias=True, include=set(fields))
        raw = self._write(user_id, payload)
        document = UserDocument.model_validate(raw)
        self._notify(user_id, document, origin)
        return document

    def subscribe(self, user_id: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for every write to ``user_id``'s document.

        Returns:
            A function that removes the subscription
        """
        with self._listeners_lock:
            self._listeners.setdefault(user_id, []).append(callback)

        def unsubscribe() -> None:
            with self._listeners_lock:
                callbacks = self._listeners.get(user_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._listeners.pop(user_id, None)

        return unsubscribe

    def _notify(self, user_id: str, document: UserDocument, origin: Any) -> None:
        with self._listeners_lock:
            callbacks = list(self._listeners.get(user_id, []))
        for callback in callbacks:
            try:
                callback(document, origin)
            except Exception:
                logger.exception("Document listener failed for user %s", user_id)


class MemoryDocumentStore(DocumentStore):
    """Process-local store, mainly for tests and demos."""

    def __init__(self) -> None:
        super().__init__()
        self._documents: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def read(self, user_id: str) -> UserDocument:
        with self._lock:
            raw = dict(self._documents.get(user_id, {}))
        return UserDocument.model_validate(raw)

    def _write(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            raw = self._documents.setdefault(user_id, {})
            raw.update(payload)
            return dict(raw)


class LocalFileDocumentStore(DocumentStore):
    """One JSON file per user under ``directory``."""

    def __init__(self, directory: str | os.PathLike) -> None:
        super().__init__()
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def path_for(self, user_id: str) -> Path:
        return self.directory / f"{_UNSAFE_FILENAME_CHARS.sub('_', user_id)}.json"

    def _load(self, user_id: str) -> dict[str, Any]:
        path = self.path_for(user_id)
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def read(self, user_id: str) -> UserDocument:
        with self._lock:
            raw = self._load(user_id)
        return UserDocument.model_validate(raw)

    def _write(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            raw = self._load(user_id)
            raw.update(payload)
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.path_for(user_id)
            tmp_path = path.with_suffix(".json.tmp")
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(raw, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        return raw


class SqlDocumentStore(DocumentStore):
    """Documents kept in the ``user_documents`` table."""

    def __init__(self, session_factory: Callable[[], Any]) -> None:
        super().__init__()
        self._session_factory = session_factory

    def read(self, user_id: str) -> UserDocument:
        from bookflix.db.crud import UserDocumentCRUD

        with self._session_factory() as session:
            raw = UserDocumentCRUD.read(session, user_id)
        return UserDocument.model_validate(raw)

    def _write(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        from bookflix.db.crud import UserDocumentCRUD

        with self._session_factory() as session:
            UserDocumentCRUD.merge_update(session, user_id, payload)
            session.commit()
            return UserDocumentCRUD.read(session, user_id)


def create_document_store(config: StorageConfig | None = None) -> DocumentStore:
    """Build the document store selected by ``config`` (environment when None)."""
    if config is None:
        config = StorageConfig.from_env()
    config.validate()

    if config.mode == "memory":
        return MemoryDocumentStore()
    if config.mode == "local":
        logger.info("Using local document storage at %s", config.path)
        return LocalFileDocumentStore(config.path)

    from bookflix.db.session import create_session_factory

    logger.info("Using database document storage")
    return SqlDocumentStore(create_session_factory(config.database_url))
