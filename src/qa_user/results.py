"""
qa_user.results

Typed outcomes for expected business failures.

Responsibilities:
- `Ok` / `Err` result variants returned by validators, the token codec and services.
- `ErrorKind`: the stable, client-visible failure vocabulary.

Faults (store unreachable, bad configuration) are raised as exceptions instead and
handled by the API layer's catch-all handler.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class ErrorKind(enum.StrEnum):
    user_not_found = "USER_NOT_FOUND"
    # Also referred to as "username taken" by the registration rules.
    user_already_exists = "USER_ALREADY_EXISTS"
    password_incorrect = "PASSWORD_INCORRECT"
    password_mismatch = "PASSWORD_MISMATCH"
    invalid_token = "INVALID_TOKEN"
    bad_request = "BAD_REQUEST"
    unauthorized = "UNAUTHORIZED"
    forbidden = "FORBIDDEN"
    internal_error = "INTERNAL_ERROR"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    kind: E


Result = Ok[T] | Err[E]

# Shared success value for checks that carry no payload.
OK: Ok[None] = Ok(None)


# --- Module Notes -----------------------------------------------------------
# `Err.kind` is an `ErrorKind` everywhere except inside the token codec, which uses the
# finer `auth.jwt.TokenFailure`; the API layer collapses those to INVALID_TOKEN.
