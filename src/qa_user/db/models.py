"""
qa_user.db.models

Persistence schema for user identities.

Responsibilities:
- Define the `User` row: unique username, display name, bcrypt password hash and
  lifecycle timestamps.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from qa_user.db.base import Base


def naive_utc(ts: datetime) -> datetime:
    # Timestamps are stored as naive UTC; aware inputs are normalised first.
    if ts.tzinfo is not None:
        ts = ts.astimezone(UTC).replace(tzinfo=None)
    return ts


def _utcnow() -> datetime:
    return naive_utc(datetime.now(tz=UTC))


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Immutable after creation; uniqueness is the store's job (uq_users_username).
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    nickname: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Always a bcrypt digest, never the raw password.
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
