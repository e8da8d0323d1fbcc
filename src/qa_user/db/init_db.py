"""
qa_user.db.init_db

DB initialization helpers.

Responsibilities:
- Create the users table for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from qa_user.db import models  # noqa: F401  # registers tables on Base.metadata
from qa_user.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
