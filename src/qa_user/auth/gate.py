"""
qa_user.auth.gate

Per-request authentication gate.

Responsibilities:
- Turn an (optional) bearer token into a bound `Principal`, or leave the request anonymous.
- Bind the outcome exactly once per request.

The gate never rejects a request. Missing, malformed, expired and tampered tokens all
end in the same anonymous state; protected routes turn that into a uniform 401.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime

from qa_user.auth.jwt import TokenCodec
from qa_user.auth.models import AuthContext, Principal
from qa_user.observability.logging import get_logger
from qa_user.results import Err

PrincipalLookup = Callable[[str], Awaitable[Principal | None]]

log = get_logger(__name__)


class AuthenticationGate:
    def __init__(self, *, codec: TokenCodec, lookup: PrincipalLookup) -> None:
        self._codec = codec
        self._lookup = lookup

    async def authenticate(
        self,
        ctx: AuthContext,
        token: str | None,
        *,
        now: datetime | None = None,
    ) -> Principal | None:
        if ctx.resolved:
            return ctx.principal
        ctx.principal = await self._resolve(token, now)
        ctx.resolved = True
        return ctx.principal

    async def _resolve(self, token: str | None, now: datetime | None) -> Principal | None:
        if token is None:
            return None

        verified = self._codec.verify_and_extract_subject(token, now=now)
        if isinstance(verified, Err):
            # Server-side only; clients never learn which check failed.
            log.debug("token_rejected", reason=verified.kind.value)
            return None

        principal = await self._lookup(verified.value)
        if principal is None:
            log.info("token_subject_unknown", username=verified.value)
        return principal


# --- Module Notes -----------------------------------------------------------
# Store lookups are the only I/O here; their failures propagate as faults (500).
