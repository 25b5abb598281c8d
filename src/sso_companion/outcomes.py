"""
sso_companion.outcomes

Typed result variants returned across component boundaries.

Responsibilities:
- Define the verification outcome union (`Verified | Rejected | Unavailable | InvalidInput`).
- Define the remote-call success values and the connectivity probe result.
- Enumerate stable reason codes used by logs and the API layer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from sso_companion.identity.models import RemoteIdentityAssertion


class RejectReason(enum.StrEnum):
    sso_disabled = "SSO_DISABLED"
    remote_denied = "REMOTE_DENIED"
    malformed_response = "MALFORMED_RESPONSE"
    unknown_user = "UNKNOWN_USER"


class UnavailableReason(enum.StrEnum):
    timeout = "TIMEOUT"
    transport_error = "TRANSPORT_ERROR"
    store_error = "STORE_ERROR"
    internal_error = "INTERNAL_ERROR"


class InvalidInputReason(enum.StrEnum):
    missing_token = "MISSING_TOKEN"


@dataclass(frozen=True, slots=True)
class Verified:
    user_id: str
    username: str


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: RejectReason
    # Only set for `remote_denied`: the companion's HTTP status.
    status_code: int | None = None
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class Unavailable:
    reason: UnavailableReason
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class InvalidInput:
    reason: InvalidInputReason


@dataclass(frozen=True, slots=True)
class HealthCheckPassed:
    status_code: int


@dataclass(frozen=True, slots=True)
class ConnectivityResult:
    success: bool
    message: str
    timestamp: datetime


VerificationOutcome: TypeAlias = Verified | Rejected | Unavailable | InvalidInput
VerifyCallResult: TypeAlias = RemoteIdentityAssertion | Rejected | Unavailable | InvalidInput
HealthCallResult: TypeAlias = HealthCheckPassed | Rejected | Unavailable


# --- Module Notes -----------------------------------------------------------
# Reason values are emitted in structured logs; treat them as a stable contract.
