"""
tests.test_logging

Credential redaction in structured log events.
"""

from __future__ import annotations

from sso_companion.observability.logging import REDACTED, redact_sensitive


def test_redacts_credentials() -> None:
    event = redact_sensitive(
        None,
        "info",
        {"event": "x", "token": "abc", "shared_secret": "s", "authorization": "Bearer y"},
    )
    assert event == {
        "event": "x",
        "token": REDACTED,
        "shared_secret": REDACTED,
        "authorization": REDACTED,
    }


def test_leaves_other_fields_and_empty_values() -> None:
    event = redact_sensitive(None, "info", {"event": "x", "username": "alice", "token": ""})
    assert event == {"event": "x", "username": "alice", "token": ""}
