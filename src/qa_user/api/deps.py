"""
qa_user.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Hand out the process-wide auth components stored on app.state.
- Build request-scoped services.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_user.auth.jwt import TokenCodec
from qa_user.auth.passwords import PasswordHasher
from qa_user.services.account_service import AccountService
from qa_user.services.session_issuer import SessionIssuer
from qa_user.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on startup in `qa_user.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[no-any-return]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed by the service layer.
    async with session_factory() as session:
        yield session


def token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec  # type: ignore[no-any-return]


def password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher  # type: ignore[no-any-return]


def session_issuer(
    session: AsyncSession = Depends(db_session),
    codec: TokenCodec = Depends(token_codec),
    hasher: PasswordHasher = Depends(password_hasher),
) -> SessionIssuer:
    return SessionIssuer(session=session, codec=codec, hasher=hasher)


def account_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
) -> AccountService:
    return AccountService(session=session, hasher=hasher)
