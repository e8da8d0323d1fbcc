"""
qa_user.auth.credentials

Business rules for registration and password-change requests.

Responsibilities:
- Username uniqueness and password confirmation on registration.
- Old-password verification and new-password confirmation on password change.

Checks run in a fixed order; the first failing rule decides the outcome.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from qa_user.results import OK, Err, ErrorKind, Result

UserExistsFn = Callable[[str], Awaitable[bool]]
VerifyPasswordFn = Callable[[str, str], Awaitable[bool]]


class CredentialValidator:
    def __init__(self, *, user_exists: UserExistsFn) -> None:
        self._user_exists = user_exists

    async def validate_registration(
        self, username: str, password: str, confirm_password: str
    ) -> Result[None, ErrorKind]:
        if await self._user_exists(username):
            return Err(ErrorKind.user_already_exists)
        # Exact, case-sensitive comparison.
        if password != confirm_password:
            return Err(ErrorKind.password_mismatch)
        return OK

    async def validate_password_change(
        self,
        old_password: str,
        stored_hash: str,
        new_password: str,
        confirm_new_password: str,
        verify: VerifyPasswordFn,
    ) -> Result[None, ErrorKind]:
        if not await verify(old_password, stored_hash):
            return Err(ErrorKind.password_incorrect)
        if new_password != confirm_new_password:
            return Err(ErrorKind.password_mismatch)
        return OK
