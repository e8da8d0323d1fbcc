"""
qa_user.services.account_service

Account lifecycle service.

Responsibilities:
- Register users (rules, hashing, insert) and change passwords.
- Public lookups by id and by username.

Open decision on password change: the bearer token's subject is authoritative. The
username in the request body must match it, otherwise the call is FORBIDDEN.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from qa_user.auth.credentials import CredentialValidator
from qa_user.auth.models import Principal
from qa_user.auth.passwords import PasswordHasher
from qa_user.db.models import User, naive_utc
from qa_user.db.repositories.users import DuplicateUsernameError, UserRepo
from qa_user.observability.logging import get_logger
from qa_user.results import Err, ErrorKind, Ok, Result

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UserProfile:
    user_id: int
    username: str
    nickname: str | None
    email: str | None
    register_time: datetime

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(
            user_id=user.id,
            username=user.username,
            nickname=user.nickname,
            email=user.email,
            register_time=user.created_at,
        )


@dataclass(frozen=True, slots=True)
class PasswordChanged:
    user_id: int
    username: str
    update_time: datetime


class AccountService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        hasher: PasswordHasher,
        users: UserRepo | None = None,
    ) -> None:
        self._session = session
        self._hasher = hasher
        self._users = users if users is not None else UserRepo(session)
        self._validator = CredentialValidator(user_exists=self._users.exists_by_username)

    async def register(
        self,
        *,
        username: str,
        password: str,
        confirm_password: str,
        nickname: str | None = None,
        email: str | None = None,
        now: datetime | None = None,
    ) -> Result[UserProfile, ErrorKind]:
        now = now or datetime.now(tz=UTC)
        log.info("register_started", username=username)

        checked = await self._validator.validate_registration(username, password, confirm_password)
        if isinstance(checked, Err):
            log.info("register_rejected", username=username, reason=checked.kind.value)
            return checked

        password_hash = await self._hasher.hash_async(password)
        try:
            user = await self._users.create(
                username=username,
                password_hash=password_hash,
                nickname=nickname,
                email=email,
                at=now,
            )
        except DuplicateUsernameError:
            # Lost a race with a concurrent registration after the existence check.
            log.info("register_rejected", username=username, reason="UNIQUE_CONSTRAINT")
            return Err(ErrorKind.user_already_exists)

        profile = UserProfile(
            user_id=user.id,
            username=user.username,
            nickname=user.nickname,
            email=user.email,
            register_time=naive_utc(now),
        )
        await self._session.commit()
        log.info("register_succeeded", username=username, user_id=profile.user_id)
        return Ok(profile)

    async def change_password(
        self,
        *,
        principal: Principal,
        username: str,
        old_password: str,
        new_password: str,
        confirm_new_password: str,
        now: datetime | None = None,
    ) -> Result[PasswordChanged, ErrorKind]:
        now = now or datetime.now(tz=UTC)
        log.info("update_password_started", username=principal.username)

        if username != principal.username:
            log.warning(
                "update_password_subject_mismatch",
                username=principal.username,
                requested_username=username,
            )
            return Err(ErrorKind.forbidden)

        user = await self._users.get_by_username(principal.username)
        if user is None:
            return Err(ErrorKind.user_not_found)

        checked = await self._validator.validate_password_change(
            old_password,
            user.password_hash,
            new_password,
            confirm_new_password,
            self._hasher.verify_async,
        )
        if isinstance(checked, Err):
            log.info("update_password_rejected", username=username, reason=checked.kind.value)
            return checked

        new_hash = await self._hasher.hash_async(new_password)
        await self._users.set_password_hash(user, new_hash, at=now)
        changed = PasswordChanged(
            user_id=user.id, username=user.username, update_time=naive_utc(now)
        )
        await self._session.commit()
        log.info("update_password_succeeded", username=username)
        return Ok(changed)

    async def get_by_id(self, user_id: int) -> Result[UserProfile, ErrorKind]:
        user = await self._users.get(user_id)
        if user is None:
            log.warning("user_not_found", user_id=user_id)
            return Err(ErrorKind.user_not_found)
        return Ok(UserProfile.from_user(user))

    async def get_by_username(self, username: str) -> Result[UserProfile, ErrorKind]:
        user = await self._users.get_by_username(username)
        if user is None:
            log.warning("user_not_found", username=username)
            return Err(ErrorKind.user_not_found)
        return Ok(UserProfile.from_user(user))
