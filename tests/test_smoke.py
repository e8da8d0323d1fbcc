"""
tests.test_smoke

Boot the service and hit the probes.
"""

from __future__ import annotations

import httpx
import pytest

from qa_user.api.app import create_app
from qa_user.auth.jwt import ConfigurationError
from qa_user.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["x-request-id"]

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready", "service": "qa-user-service"}


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"


def test_prod_refuses_dev_signing_key() -> None:
    with pytest.raises(ConfigurationError):
        create_app(settings=Settings(env="prod"))


def test_short_signing_key_fails_at_startup() -> None:
    with pytest.raises(ConfigurationError):
        create_app(settings=Settings(env="test", jwt_secret="c2hvcnQ="))


# --- Module Notes -----------------------------------------------------------
# Endpoint behaviour is covered in test_api_users.py.
