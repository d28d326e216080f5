"""Create a demo reader in the users table.

Usage:
    python -m bookflix.seed --email reader@example.com --name "Demo Reader"
    python -m bookflix.seed --token   # also print a bearer token for the API
"""

from __future__ import annotations

import argparse

from sqlalchemy.orm import Session

from bookflix.db.base import Base
from bookflix.db.crud import UserCRUD, UserDocumentCRUD
from bookflix.db.models import User
from bookflix.db.session import create_db_engine

DEFAULT_GENRES = ["fiction", "mystery", "fantasy"]


def seed_reader(
    session: Session,
    email: str,
    name: str,
    favorite_genres: list[str],
) -> tuple[User, bool]:
    """Return the reader with ``email``, creating it (and an empty document) if missing."""
    existing = UserCRUD.get_by_email(session, email)
    if existing is not None:
        return existing, False
    user = UserCRUD.create(session, email=email, name=name, favorite_genres=favorite_genres)
    UserDocumentCRUD.merge_update(session, user.id, {})
    return user, True


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Insert a demo reader into the BookFlix database.")
    parser.add_argument("--database-url", default=None, help="Defaults to DATABASE_URL / .env")
    parser.add_argument("--email", default="reader@example.com")
    parser.add_argument("--name", default="Demo Reader")
    parser.add_argument(
        "--genres",
        default=",".join(DEFAULT_GENRES),
        help="Comma-separated favourite genres",
    )
    parser.add_argument("--token", action="store_true", help="Print an API bearer token for the reader")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    engine = create_db_engine(args.database_url)
    Base.metadata.create_all(engine)

    genres = [g.strip() for g in args.genres.split(",") if g.strip()]
    with Session(engine) as session:
        user, created = seed_reader(session, args.email, args.name, genres)
        session.commit()
        print(f"{'Created' if created else 'Found'} reader {user.email} (id={user.id})")
        user_id = user.id

    if args.token:
        from apps.api.core.auth import create_token

        print(f"Bearer token: {create_token(user_id)}")


if __name__ == "__main__":
    main()
