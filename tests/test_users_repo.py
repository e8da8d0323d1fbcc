"""
tests.test_users_repo

`UserRepo` against the real SQLite store: only the username unique violation becomes
`DuplicateUsernameError`; other integrity failures propagate unchanged.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from sqlalchemy.exc import IntegrityError

from qa_user.db.repositories.users import DuplicateUsernameError, UserRepo


@pytest.mark.asyncio
async def test_duplicate_username_is_typed(app: FastAPI) -> None:
    async with app.state.sessionmaker() as session:
        await UserRepo(session).create(username="alice", password_hash="$2b$04$x")
        await session.commit()

    async with app.state.sessionmaker() as session:
        repo = UserRepo(session)
        with pytest.raises(DuplicateUsernameError) as exc_info:
            await repo.create(username="alice", password_hash="$2b$04$y")
        assert exc_info.value.username == "alice"
        # Session is still usable after the failed insert.
        assert await repo.exists_by_username("alice")


@pytest.mark.asyncio
async def test_other_integrity_errors_propagate(app: FastAPI) -> None:
    async with app.state.sessionmaker() as session:
        repo = UserRepo(session)
        with pytest.raises(IntegrityError):
            await repo.create(username="bob", password_hash=None)  # type: ignore[arg-type]
        assert not await repo.exists_by_username("bob")
