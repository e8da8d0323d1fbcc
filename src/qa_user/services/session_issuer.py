"""
qa_user.services.session_issuer

Login orchestration.

Responsibilities:
- Check the username, then the password, then mint a token.
- Record the login time (and upgrade stale hashes) without ever failing the login.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_user.auth.jwt import TokenCodec
from qa_user.auth.passwords import PasswordHasher
from qa_user.db.models import User, naive_utc
from qa_user.db.repositories.users import UserRepo
from qa_user.observability.logging import get_logger
from qa_user.results import Err, ErrorKind, Ok, Result

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoginResult:
    token: str
    user_id: int
    username: str
    nickname: str | None
    email: str | None
    login_time: datetime


class SessionIssuer:
    def __init__(
        self,
        *,
        session: AsyncSession,
        codec: TokenCodec,
        hasher: PasswordHasher,
        users: UserRepo | None = None,
    ) -> None:
        self._session = session
        self._codec = codec
        self._hasher = hasher
        self._users = users if users is not None else UserRepo(session)

    async def login(
        self,
        *,
        username: str,
        password: str,
        now: datetime | None = None,
    ) -> Result[LoginResult, ErrorKind]:
        now = now or datetime.now(tz=UTC)
        log.info("login_started", username=username)

        user = await self._users.get_by_username(username)
        if user is None:
            log.info("login_rejected", username=username, reason=ErrorKind.user_not_found.value)
            return Err(ErrorKind.user_not_found)
        if not await self._hasher.verify_async(password, user.password_hash):
            log.info(
                "login_rejected", username=username, reason=ErrorKind.password_incorrect.value
            )
            return Err(ErrorKind.password_incorrect)

        result = LoginResult(
            token=self._codec.mint(user.username, now=now),
            user_id=user.id,
            username=user.username,
            nickname=user.nickname,
            email=user.email,
            login_time=naive_utc(now),
        )
        await self._record_login(user, password=password, now=now)
        log.info("login_succeeded", username=username, user_id=result.user_id)
        return Ok(result)

    async def _record_login(self, user: User, *, password: str, now: datetime) -> None:
        # Best effort: the token is already minted and the caller gets it regardless.
        username = user.username
        try:
            if self._hasher.needs_rehash(user.password_hash):
                new_hash = await self._hasher.hash_async(password)
                await self._users.set_password_hash(user, new_hash, at=now)
            await self._users.record_login(user, at=now)
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            log.warning("login_record_failed", username=username, exc_info=True)
