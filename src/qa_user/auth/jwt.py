"""
qa_user.auth.jwt

JWT minting and validation.

Responsibilities:
- Hold the immutable signing configuration (`JwtConfig`), derived once from settings.
- Mint compact HS512 tokens carrying the username as subject.
- Verify signature, algorithm, required claims and expiry against an explicit instant.

Every verification failure is a value (`Err[TokenFailure]`), never an exception; callers
collapse all kinds into a single "invalid token" outcome.
"""

from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidAlgorithmError, InvalidSignatureError, InvalidTokenError

from qa_user.results import Err, Ok, Result
from qa_user.settings import Settings

MIN_KEY_BYTES = 32
SUPPORTED_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
REQUIRED_CLAIMS = ["sub", "iat", "exp"]
# Mirrors `sub`; older clients read the username from this claim.
USERNAME_CLAIM = "username"


class ConfigurationError(Exception):
    pass


class TokenFailure(enum.StrEnum):
    empty = "EMPTY"
    malformed = "MALFORMED"
    expired = "EXPIRED"
    signature_mismatch = "SIGNATURE_MISMATCH"
    unsupported_algorithm = "UNSUPPORTED_ALGORITHM"


@dataclass(frozen=True, slots=True)
class JwtConfig:
    key: bytes = field(repr=False)
    ttl: timedelta
    alg: str = "HS512"

    def __post_init__(self) -> None:
        if self.alg not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(f"unsupported signing algorithm: {self.alg}")
        if len(self.key) < MIN_KEY_BYTES:
            raise ConfigurationError(
                f"signing key must be at least {MIN_KEY_BYTES * 8} bits, got {len(self.key) * 8}"
            )
        if self.ttl <= timedelta(0):
            raise ConfigurationError("token ttl must be positive")

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        try:
            key = base64.b64decode(settings.jwt_secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("jwt_secret is not valid base64") from e
        return cls(
            key=key,
            ttl=timedelta(seconds=settings.jwt_ttl_seconds),
            alg=settings.jwt_alg,
        )


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _numeric_date(value: Any) -> float | None:
    # bool is an int subclass; a `true` exp is not a timestamp.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class TokenCodec:
    """
    Stateless JWT codec bound to one `JwtConfig`.

    Safe to share across concurrent requests: it holds no mutable state.
    """

    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    @property
    def ttl(self) -> timedelta:
        return self._cfg.ttl

    def mint(self, subject: str, *, now: datetime | None = None) -> str:
        if not subject or not subject.strip():
            raise ValueError("subject must be a non-empty string")
        issued_at = (now or _utcnow()).timestamp()
        payload: dict[str, Any] = {
            "sub": subject,
            USERNAME_CLAIM: subject,
            "iat": issued_at,
            # Fractional NumericDate: the token lives exactly ttl, not up to a second less.
            "exp": issued_at + self._cfg.ttl.total_seconds(),
        }
        return jwt.encode(payload, self._cfg.key, algorithm=self._cfg.alg)

    def verify_and_extract_subject(
        self, token: str | None, *, now: datetime | None = None
    ) -> Result[str, TokenFailure]:
        if not token or not token.strip():
            return Err(TokenFailure.empty)
        try:
            # Expiry is checked below against the caller's instant, not the wall clock.
            claims = jwt.decode(
                token,
                self._cfg.key,
                algorithms=[self._cfg.alg],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except InvalidAlgorithmError:
            return Err(TokenFailure.unsupported_algorithm)
        except InvalidSignatureError:
            return Err(TokenFailure.signature_mismatch)
        except InvalidTokenError:
            return Err(TokenFailure.malformed)

        subject = claims.get("sub")
        expires_at = _numeric_date(claims.get("exp"))
        if not isinstance(subject, str) or not subject or expires_at is None:
            return Err(TokenFailure.malformed)
        if (now or _utcnow()).timestamp() > expires_at:
            return Err(TokenFailure.expired)
        return Ok(subject)

    def remaining_ttl(
        self, token: str | None, *, now: datetime | None = None
    ) -> Result[timedelta, TokenFailure]:
        """
        Time left until `exp`; negative once expired.

        Reads the claim without checking the signature. Call
        `verify_and_extract_subject` first when the answer has to be trusted.
        """

        if not token or not token.strip():
            return Err(TokenFailure.empty)
        try:
            claims = jwt.decode(token, options={"verify_signature": False, "require": ["exp"]})
        except InvalidTokenError:
            return Err(TokenFailure.malformed)
        expires_at = _numeric_date(claims.get("exp"))
        if expires_at is None:
            return Err(TokenFailure.malformed)
        return Ok(datetime.fromtimestamp(expires_at, tz=UTC) - (now or _utcnow()))


# --- Module Notes -----------------------------------------------------------
# Key rotation is not supported at runtime. A deployment adding it would swap the
# codec held on `app.state` for a new one; existing instances never change.
