"""
qa_user.db.repositories.users

Repository for `User` rows.

Responsibilities:
- Create users, translating the username unique-constraint violation into a typed error.
- Look users up by id and by username; cheap existence checks.
- Update the password hash and the last-login timestamp.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_user.db.models import User, naive_utc


class DuplicateUsernameError(Exception):
    def __init__(self, username: str) -> None:
        super().__init__(f"username already taken: {username}")
        self.username = username


def _is_username_conflict(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: users.username"; Postgres names the constraint.
    message = str(exc.orig)
    return "uq_users_username" in message or "UNIQUE constraint failed: users.username" in message


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        username: str,
        password_hash: str,
        nickname: str | None = None,
        email: str | None = None,
        at: datetime | None = None,
    ) -> User:
        user = User(
            username=username,
            nickname=nickname,
            email=email,
            password_hash=password_hash,
        )
        if at is not None:
            user.created_at = user.updated_at = naive_utc(at)
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # The unit of work only holds this insert; roll it back so the session stays usable.
            await self._session.rollback()
            if _is_username_conflict(e):
                raise DuplicateUsernameError(username) from e
            raise
        return user

    async def get(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(exists().where(User.username == username))
        return bool((await self._session.execute(stmt)).scalar())

    async def set_password_hash(self, user: User, password_hash: str, *, at: datetime) -> None:
        user.password_hash = password_hash
        user.updated_at = naive_utc(at)
        await self._session.flush()

    async def record_login(self, user: User, *, at: datetime) -> None:
        user.last_login_at = naive_utc(at)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Transactions are committed by the services, never here.
