"""
tests.conftest

Shared fixtures.

Responsibilities:
- Test settings: temp-dir SQLite database, minimum bcrypt work factor, fixed signing key.
- An app with its lifespan running, and an in-process httpx client against it.
"""

from __future__ import annotations

import base64
from collections.abc import AsyncIterator
from datetime import timedelta
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from qa_user.api.app import create_app
from qa_user.auth.jwt import JwtConfig, TokenCodec
from qa_user.auth.passwords import PasswordHasher
from qa_user.settings import Settings

TEST_KEY = bytes(range(64))
TEST_JWT_SECRET = base64.b64encode(TEST_KEY).decode("ascii")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'qa_user.db'}",
        jwt_secret=TEST_JWT_SECRET,
        jwt_ttl_seconds=3600,
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(JwtConfig(key=TEST_KEY, ttl=timedelta(hours=1)))


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx's ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
