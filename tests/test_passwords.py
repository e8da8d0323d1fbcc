"""
tests.test_passwords

bcrypt hashing: salting, exact-match verification, the 72-byte input limit and
work-factor tracking.
"""

from __future__ import annotations

import pytest

from qa_user.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher


def test_hash_is_salted_and_never_plaintext(hasher: PasswordHasher) -> None:
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")
    assert first != second
    assert "secret123" not in first
    assert first.startswith("$2")


@pytest.mark.parametrize("raw", ["secret123", "", "pässwörd"])
def test_verify_accepts_only_the_hashed_password(hasher: PasswordHasher, raw: str) -> None:
    digest = hasher.hash(raw)
    assert hasher.verify(raw, digest)
    assert not hasher.verify(raw + "!", digest)
    assert not hasher.verify(raw.upper() + "?", digest)


def test_verify_is_case_sensitive(hasher: PasswordHasher) -> None:
    assert not hasher.verify("Secret123", hasher.hash("secret123"))


def test_shared_72_byte_prefix_does_not_verify(hasher: PasswordHasher) -> None:
    prefix = "a" * MAX_PASSWORD_BYTES
    digest = hasher.hash(prefix)
    assert hasher.verify(prefix, digest)
    assert not hasher.verify(prefix + "-attacker", digest)


@pytest.mark.parametrize("raw", ["a" * (MAX_PASSWORD_BYTES + 1), "\u00e9" * 37])
def test_hash_refuses_passwords_over_the_limit(hasher: PasswordHasher, raw: str) -> None:
    with pytest.raises(ValueError):
        hasher.hash(raw)


def test_malformed_digest_does_not_verify(hasher: PasswordHasher) -> None:
    assert not hasher.verify("secret123", "plaintext-not-a-hash")


def test_needs_rehash_tracks_work_factor(hasher: PasswordHasher) -> None:
    assert not hasher.needs_rehash(hasher.hash("pw"))
    assert PasswordHasher(rounds=5).needs_rehash(hasher.hash("pw"))
    assert hasher.needs_rehash("garbage")


@pytest.mark.asyncio
async def test_async_variants(hasher: PasswordHasher) -> None:
    digest = await hasher.hash_async("secret123")
    assert await hasher.verify_async("secret123", digest)
    assert not await hasher.verify_async("wrong", digest)
