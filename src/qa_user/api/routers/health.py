"""
qa_user.api.routers.health

Health and readiness endpoints (public).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from qa_user.api.deps import db_session, settings_dep
from qa_user.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    # Ready once the users store answers.
    await session.execute(text("SELECT 1"))
    return {"status": "ready", "service": settings.service_name}
