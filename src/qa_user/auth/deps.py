"""
qa_user.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Run the authentication gate once per request (`bind_principal`, installed app-wide).
- Reject anonymous callers on protected routes (`require_principal`).
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from qa_user.api.deps import db_session, token_codec
from qa_user.api.errors import ApiError
from qa_user.auth.gate import AuthenticationGate
from qa_user.auth.jwt import TokenCodec
from qa_user.auth.models import AuthContext, Principal
from qa_user.db.repositories.users import UserRepo
from qa_user.results import ErrorKind

# auto_error=False: a missing header or a non-Bearer scheme means "anonymous", not 403.
_bearer = HTTPBearer(auto_error=False)


class UserLookup:
    """
    Resolves a token subject to a `Principal` through the request's DB session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._users = UserRepo(session)

    async def __call__(self, username: str) -> Principal | None:
        user = await self._users.get_by_username(username)
        if user is None:
            return None
        return Principal(user_id=user.id, username=user.username, nickname=user.nickname)


def auth_context(request: Request) -> AuthContext:
    ctx = getattr(request.state, "auth", None)
    if ctx is None:
        ctx = AuthContext()
        request.state.auth = ctx
    return ctx


async def bind_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    codec: TokenCodec = Depends(token_codec),
    session: AsyncSession = Depends(db_session),
) -> Principal | None:
    gate = AuthenticationGate(codec=codec, lookup=UserLookup(session))
    token = creds.credentials if creds is not None else None
    return await gate.authenticate(auth_context(request), token)


def require_principal(principal: Principal | None = Depends(bind_principal)) -> Principal:
    if principal is None:
        raise ApiError(ErrorKind.unauthorized)
    return principal


# --- Module Notes -----------------------------------------------------------
# Missing, expired and tampered tokens all surface as the same UNAUTHORIZED body.
