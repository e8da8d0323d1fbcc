"""
tests.test_gate

Authentication gate state machine: bound principal on a good token, anonymous on
everything else, and at most one resolution per request.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from qa_user.auth.gate import AuthenticationGate
from qa_user.auth.jwt import TokenCodec
from qa_user.auth.models import AuthContext, Principal

T0 = datetime(2026, 1, 1, tzinfo=UTC)
ALICE = Principal(user_id=1, username="alice", nickname="Alice")


class CountingLookup:
    def __init__(self, *principals: Principal) -> None:
        self._by_name = {p.username: p for p in principals}
        self.calls: list[str] = []

    async def __call__(self, username: str) -> Principal | None:
        self.calls.append(username)
        return self._by_name.get(username)


@pytest.mark.asyncio
async def test_valid_token_binds_principal(codec: TokenCodec) -> None:
    lookup = CountingLookup(ALICE)
    gate = AuthenticationGate(codec=codec, lookup=lookup)
    ctx = AuthContext()

    principal = await gate.authenticate(ctx, codec.mint("alice", now=T0), now=T0)

    assert principal == ALICE
    assert ctx.principal == ALICE
    assert ctx.resolved and ctx.is_authenticated
    assert lookup.calls == ["alice"]


@pytest.mark.asyncio
async def test_second_call_is_idempotent(codec: TokenCodec) -> None:
    lookup = CountingLookup(ALICE)
    gate = AuthenticationGate(codec=codec, lookup=lookup)
    ctx = AuthContext()
    token = codec.mint("alice", now=T0)

    first = await gate.authenticate(ctx, token, now=T0)
    second = await gate.authenticate(ctx, token, now=T0)

    assert first is second
    assert lookup.calls == ["alice"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [None, "", "garbage", "a.b.c"],
)
async def test_unusable_token_leaves_request_anonymous(
    codec: TokenCodec, token: str | None
) -> None:
    lookup = CountingLookup(ALICE)
    ctx = AuthContext()

    assert await AuthenticationGate(codec=codec, lookup=lookup).authenticate(ctx, token) is None
    assert ctx.resolved and not ctx.is_authenticated
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_expired_token_is_anonymous(codec: TokenCodec) -> None:
    lookup = CountingLookup(ALICE)
    token = codec.mint("alice", now=T0)
    later = T0 + codec.ttl + timedelta(seconds=1)

    principal = await AuthenticationGate(codec=codec, lookup=lookup).authenticate(
        AuthContext(), token, now=later
    )

    assert principal is None
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_unknown_subject_is_anonymous(codec: TokenCodec) -> None:
    lookup = CountingLookup(ALICE)
    principal = await AuthenticationGate(codec=codec, lookup=lookup).authenticate(
        AuthContext(), codec.mint("ghost", now=T0), now=T0
    )
    assert principal is None
    assert lookup.calls == ["ghost"]


