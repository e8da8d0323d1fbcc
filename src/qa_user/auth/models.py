"""
qa_user.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
- Define the request-scoped holder the authentication gate binds it to.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. Public attributes only; never carries the hash.
    """

    user_id: int
    username: str
    nickname: str | None = None


@dataclass(slots=True)
class AuthContext:
    """
    Per-request authentication state, stored on `request.state.auth`.

    `resolved` flips once the gate has run; `principal` stays None for anonymous requests.
    """

    principal: Principal | None = None
    resolved: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None


# --- Module Notes -----------------------------------------------------------
# Keep these models minimal; they cross the API, service and auth layers.
