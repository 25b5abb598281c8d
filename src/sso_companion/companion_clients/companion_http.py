"""
sso_companion.companion_clients.companion_http

HTTP client boundary used to confirm SSO tokens with the companion app.

Responsibilities:
- Call `/api/auth/validate-sso` and `/api/health` with the shared-secret header.
- Reuse one pooled `httpx.AsyncClient`; base URL, secret and timeout are per call.
- Translate status codes, transport failures and response bodies into typed results.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from sso_companion.config_store import SsoConfig
from sso_companion.identity.models import RemoteIdentityAssertion
from sso_companion.outcomes import (
    HealthCallResult,
    HealthCheckPassed,
    InvalidInput,
    InvalidInputReason,
    Rejected,
    RejectReason,
    Unavailable,
    UnavailableReason,
    VerifyCallResult,
)

API_KEY_HEADER = "X-API-Key"
VALIDATE_PATH = "/api/auth/validate-sso"
HEALTH_PATH = "/api/health"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _url(base_url: str, path: str) -> str:
    # Admins enter the base URL by hand; accept it with or without a trailing slash.
    return base_url.rstrip("/") + path


class CompanionClient:
    """
    Companion app boundary.
    - One attempt per call; retry/backoff is owned by the host's auth framework.
    - Never raises for transport or protocol failures; returns typed results instead.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http
        self._timeout_seconds = timeout_seconds
        self._timeout = httpx.Timeout(timeout_seconds)

    def _headers(self, config: SsoConfig) -> dict[str, str]:
        return {API_KEY_HEADER: config.shared_secret}

    async def verify(self, token: str, config: SsoConfig) -> VerifyCallResult:
        if not token:
            return InvalidInput(InvalidInputReason.missing_token)

        sent = await self._send(
            "POST",
            _url(config.companion_base_url, VALIDATE_PATH),
            config=config,
            json={"token": token},
        )
        if isinstance(sent, Unavailable):
            return sent
        if not sent.is_success:
            return Rejected(RejectReason.remote_denied, status_code=sent.status_code)
        return _parse_assertion(sent)

    async def check_health(self, config: SsoConfig) -> HealthCallResult:
        sent = await self._send("GET", _url(config.companion_base_url, HEALTH_PATH), config=config)
        if isinstance(sent, Unavailable):
            return sent
        if not sent.is_success:
            return Rejected(RejectReason.remote_denied, status_code=sent.status_code)
        return HealthCheckPassed(status_code=sent.status_code)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        config: SsoConfig,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response | Unavailable:
        try:
            # Caps the whole call, body included; httpx timeouts apply per phase.
            async with asyncio.timeout(self._timeout_seconds):
                return await self._http.request(
                    method,
                    url,
                    headers=self._headers(config),
                    json=json,
                    timeout=self._timeout,
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            return Unavailable(UnavailableReason.timeout, detail=type(e).__name__)
        except httpx.TransportError as e:
            # DNS, connection refused, TLS handshake, unsupported scheme...
            return Unavailable(UnavailableReason.transport_error, detail=str(e) or type(e).__name__)
        except httpx.InvalidURL as e:
            return Unavailable(UnavailableReason.transport_error, detail=str(e))
        except UnicodeEncodeError:
            # Header values must be ASCII.
            return Unavailable(
                UnavailableReason.transport_error,
                detail="shared secret contains non-ASCII characters",
            )


def _parse_assertion(response: httpx.Response) -> RemoteIdentityAssertion | Rejected:
    try:
        payload = response.json()
    except ValueError:
        return Rejected(RejectReason.malformed_response, detail="response body is not JSON")

    if not isinstance(payload, dict):
        return Rejected(RejectReason.malformed_response, detail="response body is not an object")

    try:
        return RemoteIdentityAssertion.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        return Rejected(RejectReason.malformed_response, detail=f"invalid fields: {fields}")


# --- Module Notes -----------------------------------------------------------
# The shared httpx client is created and closed by the app lifespan (`api.app`).
# Tests substitute `httpx.MockTransport` for the companion app.
