from datetime import datetime

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    String,
    func,
)
from sqlalchemy.orm import (
    Mapped,
    mapped_column,
    relationship,
)

from bookflix.reading.models import User as DomainUser

from .base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    favorite_genres: Mapped[list] = mapped_column(JSON, default=list)
    avatar: Mapped[str] = mapped_column(String(1000), default="")
    join_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    document: Mapped["UserDocument | None"] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def to_domain(self) -> DomainUser:
        return DomainUser(
            id=self.id,
            email=self.email,
            name=self.name,
            favorite_genres=list(self.favorite_genres or []),
            avatar=self.avatar or "",
            join_date=self.join_date,
        )


class UserDocument(Base):
    """Reading data of one user, stored as JSON columns keyed by user id."""

    __tablename__ = "user_documents"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    bucket_list: Mapped[list] = mapped_column(JSON, default=list)
    reading_history: Mapped[list] = mapped_column(JSON, default=list)
    reviews: Mapped[dict] = mapped_column(JSON, default=dict)
    currently_reading: Mapped[list] = mapped_column(JSON, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    user: Mapped["User"] = relationship(back_populates="document")
