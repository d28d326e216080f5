from __future__ import annotations

from functools import lru_cache
from typing import Generator

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookflix.catalog import CatalogConfig, GoogleBooksClient, get_catalog_client
from bookflix.db.crud import UserCRUD
from bookflix.db.session import SessionLocal
from bookflix.reading import DocumentStore, ReadingListStore, StorageConfig, User, create_document_store

from .auth import decode_token
from .config import settings

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    with SessionLocal() as session:
        yield session


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        user_id = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = UserCRUD.get_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user.to_domain()


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    return create_document_store(
        StorageConfig(
            mode=settings.STORAGE_MODE,
            path=settings.STORAGE_PATH,
            database_url=settings.DATABASE_URL,
        )
    )


def get_reading_store(
    user: User = Depends(get_current_user),
    documents: DocumentStore = Depends(get_document_store),
) -> Generator[ReadingListStore, None, None]:
    store = ReadingListStore(documents, user)
    try:
        yield store
    finally:
        store.close()


def get_catalog() -> GoogleBooksClient:
    return get_catalog_client(
        CatalogConfig(
            api_key=settings.GOOGLE_BOOKS_API_KEY,
            timeout=settings.CATALOG_TIMEOUT_SECONDS,
            max_concurrency=settings.CATALOG_MAX_CONCURRENCY,
        )
    )
