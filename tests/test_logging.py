"""
tests.test_logging

Credential redaction in structured log events.
"""

from __future__ import annotations

from qa_user.observability.logging import REDACTED, redact_sensitive


def test_credentials_are_redacted() -> None:
    event = redact_sensitive(
        None,
        "info",
        {"event": "login_started", "username": "alice", "password": "secret123", "token": "a.b.c"},
    )
    assert event == {
        "event": "login_started",
        "username": "alice",
        "password": REDACTED,
        "token": REDACTED,
    }
