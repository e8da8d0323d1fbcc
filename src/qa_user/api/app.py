"""
qa_user.api.app

FastAPI app factory for the user-account service.

Responsibilities:
- Derive the immutable auth components (token codec, password hasher) from settings.
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from qa_user import __version__
from qa_user.api.errors import install_exception_handlers
from qa_user.api.routers.health import router as health_router
from qa_user.api.routers.users import router as users_router
from qa_user.auth.deps import bind_principal
from qa_user.auth.jwt import ConfigurationError, JwtConfig, TokenCodec
from qa_user.auth.passwords import PasswordHasher
from qa_user.db.init_db import init_db
from qa_user.db.session import create_engine, create_sessionmaker
from qa_user.observability.logging import configure_logging, get_logger
from qa_user.observability.middleware import RequestContextMiddleware
from qa_user.settings import DEV_JWT_SECRET, Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    if settings.env == "prod" and settings.jwt_secret == DEV_JWT_SECRET:
        raise ConfigurationError("QAU_JWT_SECRET must be set in prod")
    # Fails fast on a short or non-base64 key, before the app serves anything.
    jwt_cfg = JwtConfig.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, jwt_alg=jwt_cfg.alg)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas are provisioned out of band.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="AI-QA User Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        # The gate runs on every request; it only binds, never rejects.
        dependencies=[Depends(bind_principal)],
    )
    app.state.settings = settings
    app.state.token_codec = TokenCodec(jwt_cfg)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Auth components live on app.state and are handed out by `api.deps`; nothing below
# the composition root reads settings for them.
