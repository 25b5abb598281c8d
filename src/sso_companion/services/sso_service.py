"""
sso_companion.services.sso_service

SSO verification service (orchestration boundary).

Responsibilities:
- `validate_token`: remote trust decision first, local provisioning decision second.
- `test_connection`: administrator connectivity probe against the companion health endpoint.
- Normalize unexpected faults into typed outcomes; nothing raises past this layer.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sso_companion.companion_clients.companion_http import CompanionClient
from sso_companion.config_store import ConfigStore
from sso_companion.identity.mapper import IdentityMapper
from sso_companion.identity.models import RemoteIdentityAssertion, UserStore
from sso_companion.observability.logging import get_logger
from sso_companion.outcomes import (
    ConnectivityResult,
    HealthCheckPassed,
    InvalidInput,
    InvalidInputReason,
    Rejected,
    RejectReason,
    Unavailable,
    UnavailableReason,
    VerificationOutcome,
    Verified,
)

log = get_logger(__name__)


class SsoVerificationService:
    def __init__(
        self,
        *,
        config_store: ConfigStore,
        client: CompanionClient,
        user_store: UserStore,
        mapper: IdentityMapper | None = None,
    ) -> None:
        self._config_store = config_store
        self._client = client
        self._user_store = user_store
        self._mapper = mapper or IdentityMapper()

    async def validate_token(self, token: str | None) -> VerificationOutcome:
        # One snapshot for the whole call; a concurrent admin update applies to the next call.
        config = self._config_store.snapshot()

        if not config.enabled:
            if config.log_attempts:
                log.warning("sso_attempt_rejected", reason=RejectReason.sso_disabled)
            return Rejected(RejectReason.sso_disabled)

        if not token:
            log.debug("sso_attempt_invalid", reason=InvalidInputReason.missing_token)
            return InvalidInput(InvalidInputReason.missing_token)

        try:
            if config.log_attempts:
                log.info("sso_attempt_received")

            remote = await self._client.verify(token, config)
            if not isinstance(remote, RemoteIdentityAssertion):
                _log_outcome(remote, log_attempts=config.log_attempts, stage="remote")
                return remote

            if config.log_attempts:
                log.info(
                    "sso_remote_verified",
                    username=remote.username,
                    is_admin=remote.is_admin,
                )

            outcome = await self._mapper.resolve(remote, config, self._user_store)
            _log_outcome(outcome, log_attempts=config.log_attempts, stage="provisioning")
            return outcome
        except Exception:
            log.exception("sso_validation_error")
            return Unavailable(UnavailableReason.internal_error)

    async def test_connection(self) -> ConnectivityResult:
        config = self._config_store.snapshot()
        try:
            result = await self._client.check_health(config)
        except Exception:
            log.exception("sso_connection_test_error")
            return _connectivity(False, "Internal server error")

        if isinstance(result, HealthCheckPassed):
            log.info("sso_connection_test_passed", status_code=result.status_code)
            return _connectivity(True, "Connection to companion app successful")
        if isinstance(result, Rejected):
            log.warning("sso_connection_test_failed", status_code=result.status_code)
            return _connectivity(
                False, f"Companion app returned status code: {result.status_code}"
            )

        log.error("sso_connection_test_failed", reason=result.reason, detail=result.detail)
        reason = "request timed out" if result.reason == UnavailableReason.timeout else result.detail
        reason = reason or "connection failed"
        return _connectivity(False, f"Failed to connect to companion app: {reason}")


def _connectivity(success: bool, message: str) -> ConnectivityResult:
    return ConnectivityResult(success=success, message=message, timestamp=datetime.now(tz=UTC))


def _log_outcome(outcome: VerificationOutcome, *, log_attempts: bool, stage: str) -> None:
    if isinstance(outcome, Unavailable):
        log.error("sso_attempt_unavailable", stage=stage, reason=outcome.reason, detail=outcome.detail)
    elif isinstance(outcome, Rejected):
        if log_attempts:
            log.warning(
                "sso_attempt_rejected",
                stage=stage,
                reason=outcome.reason,
                status_code=outcome.status_code,
                detail=outcome.detail,
            )
    elif isinstance(outcome, Verified):
        if log_attempts:
            log.info("sso_attempt_verified", username=outcome.username, user_id=outcome.user_id)
    elif isinstance(outcome, InvalidInput):
        log.debug("sso_attempt_invalid", stage=stage, reason=outcome.reason)


# --- Module Notes -----------------------------------------------------------
# The mapper is never invoked for an unverified remote claim: any non-assertion
# result from the client returns before the user store is touched.
