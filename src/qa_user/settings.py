"""
qa_user.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., the JWT signing key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 64 zero bytes, base64. Only acceptable outside prod; see `api.app.create_app`.
DEV_JWT_SECRET = "A" * 86 + "=="


class Settings(BaseSettings):
    """
    Env-driven settings (prefix `QAU_`), built once per process.
    """

    model_config = SettingsConfigDict(env_prefix="QAU_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "qa-user-service"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8081

    # Auth
    jwt_alg: str = "HS512"
    # Base64-encoded; must decode to at least 32 bytes.
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)
    jwt_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./qa_user.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Settings are read once; auth components receive derived, immutable config objects
# (`auth.jwt.JwtConfig`) rather than reaching back into this module.
