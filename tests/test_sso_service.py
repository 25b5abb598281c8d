"""
tests.test_sso_service

End-to-end verification pipeline: companion stub -> mapper -> fake user store.
"""

from __future__ import annotations

import httpx
import pytest

from sso_companion.identity.models import LocalUser
from sso_companion.outcomes import (
    InvalidInput,
    InvalidInputReason,
    Rejected,
    RejectReason,
    Unavailable,
    UnavailableReason,
    Verified,
)
from sso_companion.services.sso_service import SsoVerificationService


def _service(config_store, companion_client, store) -> SsoVerificationService:
    return SsoVerificationService(
        config_store=config_store,
        client=companion_client,
        user_store=store,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["opaque", "", None])
async def test_disabled_never_calls_network(
    config_store, companion, companion_client, make_store, token
) -> None:
    await config_store.update(enabled=False)
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token(token)

    assert outcome == Rejected(RejectReason.sso_disabled)
    assert companion.requests == []
    assert store.lookups == []


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", None])
async def test_empty_token_is_invalid_input(
    config_store, companion, companion_client, make_store, token
) -> None:
    outcome = await _service(config_store, companion_client, make_store()).validate_token(token)

    assert outcome == InvalidInput(InvalidInputReason.missing_token)
    assert companion.requests == []


@pytest.mark.asyncio
async def test_existing_user_verified(config_store, companion, companion_client, make_store) -> None:
    companion.body = {"username": "alice", "isAdmin": True}
    store = make_store(users=[LocalUser(id="user-1", username="alice")])

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert outcome == Verified(user_id="user-1", username="alice")
    assert store.created == []


@pytest.mark.asyncio
async def test_unknown_user_auto_created(config_store, companion, companion_client, make_store) -> None:
    companion.body = {"username": "alice", "isAdmin": True}
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert outcome == Verified(user_id="new-alice", username="alice")
    assert store.created == ["alice"]


@pytest.mark.asyncio
async def test_unknown_user_without_auto_create(
    config_store, companion, companion_client, make_store
) -> None:
    await config_store.update(auto_create_users=False)
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert outcome == Rejected(RejectReason.unknown_user)
    assert store.created == []


@pytest.mark.asyncio
async def test_remote_rejection_never_touches_store(
    config_store, companion, companion_client, make_store
) -> None:
    companion.status_code = 401
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert outcome == Rejected(RejectReason.remote_denied, status_code=401)
    assert store.lookups == []


@pytest.mark.asyncio
async def test_missing_username_never_touches_store(
    config_store, companion, companion_client, make_store
) -> None:
    companion.body = {"email": "x@example.com", "isAdmin": True}
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert isinstance(outcome, Rejected)
    assert outcome.reason == RejectReason.malformed_response
    assert store.lookups == []


@pytest.mark.asyncio
async def test_connection_refused_is_unavailable(
    config_store, companion, companion_client, make_store
) -> None:
    companion.error = httpx.ConnectError
    store = make_store()

    outcome = await _service(config_store, companion_client, store).validate_token("t")

    assert isinstance(outcome, Unavailable)
    assert outcome.reason == UnavailableReason.transport_error
    assert store.lookups == []


@pytest.mark.asyncio
async def test_unexpected_error_is_normalized(config_store, companion_client, make_store) -> None:
    class ExplodingStore:
        async def find_by_name(self, username: str) -> LocalUser | None:
            return None

        async def create(self, username: str) -> LocalUser:
            return LocalUser(id="x", username=username)

    class ExplodingMapper:
        async def resolve(self, assertion, config, user_store):
            raise KeyError("boom")

    service = SsoVerificationService(
        config_store=config_store,
        client=companion_client,
        user_store=ExplodingStore(),
        mapper=ExplodingMapper(),  # type: ignore[arg-type]
    )

    outcome = await service.validate_token("t")

    assert outcome == Unavailable(UnavailableReason.internal_error)


@pytest.mark.asyncio
async def test_config_update_applies_to_next_call(
    config_store, companion, companion_client, make_store
) -> None:
    service = _service(config_store, companion_client, make_store())
    await service.validate_token("t")

    await config_store.update(companion_base_url="http://other.test", shared_secret="rotated")
    await service.validate_token("t")

    first, second = companion.requests
    assert first.headers["X-API-Key"] == "s3cret"
    assert str(second.url) == "http://other.test/api/auth/validate-sso"
    assert second.headers["X-API-Key"] == "rotated"


@pytest.mark.asyncio
async def test_logging_toggle_does_not_change_outcome(
    config_store, companion, companion_client, make_store
) -> None:
    store = make_store()
    verbose = await _service(config_store, companion_client, store).validate_token("t")
    await config_store.update(log_attempts=False)
    quiet = await _service(config_store, companion_client, store).validate_token("t")

    assert verbose == quiet == Verified(user_id="new-alice", username="alice")


@pytest.mark.asyncio
async def test_connection_success(config_store, companion, companion_client, make_store) -> None:
    store = make_store()
    result = await _service(config_store, companion_client, store).test_connection()

    assert result.success is True
    assert result.message == "Connection to companion app successful"
    assert str(companion.requests[0].url).endswith("/api/health")
    assert store.lookups == []


@pytest.mark.asyncio
async def test_connection_bad_status(config_store, companion, companion_client, make_store) -> None:
    companion.status_code = 502
    result = await _service(config_store, companion_client, make_store()).test_connection()

    assert result.success is False
    assert result.message == "Companion app returned status code: 502"


@pytest.mark.asyncio
async def test_connection_independent_of_enabled_flag(
    config_store, companion, companion_client, make_store
) -> None:
    await config_store.update(enabled=False)
    result = await _service(config_store, companion_client, make_store()).test_connection()
    assert result.success is True


@pytest.mark.asyncio
async def test_connection_timeout(config_store, companion, companion_client, make_store) -> None:
    companion.error = httpx.ReadTimeout
    result = await _service(config_store, companion_client, make_store()).test_connection()

    assert result.success is False
    assert result.message == "Failed to connect to companion app: request timed out"
