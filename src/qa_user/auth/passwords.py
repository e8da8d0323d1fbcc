"""
qa_user.auth.passwords

Password hashing using bcrypt.

Responsibilities:
- One-way salted hashing with a configurable work factor.
- Verification delegated to bcrypt's own comparison.
- Async wrappers that move the CPU-bound work onto the thread pool.

Passwords longer than bcrypt's 72-byte input are refused, never truncated: two
passwords sharing their first 72 bytes must not verify against each other.
"""

from __future__ import annotations

import bcrypt
from starlette.concurrency import run_in_threadpool

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72
DEFAULT_ROUNDS = 12


def password_byte_length(raw_password: str) -> int:
    return len(raw_password.encode("utf-8"))


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, raw_password: str) -> str:
        raw = raw_password.encode("utf-8")
        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(raw, salt).decode("utf-8")

    def verify(self, raw_password: str, password_hash: str) -> bool:
        raw = raw_password.encode("utf-8")
        # Nothing this hasher produced can match an over-long password.
        if len(raw) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt digest ("Invalid salt").
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """
        True when the digest was produced with a different work factor.
        """

        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds

    async def hash_async(self, raw_password: str) -> str:
        return await run_in_threadpool(self.hash, raw_password)

    async def verify_async(self, raw_password: str, password_hash: str) -> bool:
        return await run_in_threadpool(self.verify, raw_password, password_hash)


# --- Module Notes -----------------------------------------------------------
# Request handlers must only use the *_async variants; a 12-round hash takes long
# enough to stall every other request on the event loop.
