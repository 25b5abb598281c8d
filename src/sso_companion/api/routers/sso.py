from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from sso_companion.api.deps import config_store_dep, sso_service_dep
from sso_companion.api.errors import error_response
from sso_companion.auth.deps import require_admin
from sso_companion.config_store import ConfigStore, SsoConfig
from sso_companion.outcomes import (
    InvalidInput,
    Rejected,
    RejectReason,
    Unavailable,
    UnavailableReason,
    VerificationOutcome,
    Verified,
)
from sso_companion.services.sso_service import SsoVerificationService

router = APIRouter(prefix="/api/sso", tags=["sso"])

_REJECT_RESPONSES: dict[RejectReason, tuple[int, str]] = {
    RejectReason.sso_disabled: (HTTP_400_BAD_REQUEST, "SSO is not enabled"),
    RejectReason.unknown_user: (
        HTTP_400_BAD_REQUEST,
        "User does not exist and auto-create is disabled",
    ),
    RejectReason.malformed_response: (HTTP_400_BAD_REQUEST, "Invalid user information in token"),
    RejectReason.remote_denied: (HTTP_401_UNAUTHORIZED, "Invalid token"),
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ValidateSsoRequest(BaseModel):
    token: str | None = None


class ValidateSsoResponse(_CamelModel):
    success: bool = True
    local_user_id: str = Field(alias="localUserId")
    username: str
    message: str = "Token validated successfully"


class SsoConfigResponse(_CamelModel):
    enabled: bool
    companion_url: str = Field(alias="companionUrl")
    auto_create_users: bool = Field(alias="autoCreateUsers")
    sync_admin_status: bool = Field(alias="syncAdminStatus")
    log_attempts: bool = Field(alias="logAttempts")

    @classmethod
    def from_config(cls, config: SsoConfig) -> SsoConfigResponse:
        # shared_secret is write-only.
        return cls(
            enabled=config.enabled,
            companion_url=config.companion_base_url,
            auto_create_users=config.auto_create_users,
            sync_admin_status=config.sync_admin_status,
            log_attempts=config.log_attempts,
        )


class SsoConfigUpdate(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    enabled: bool | None = None
    companion_url: str | None = Field(default=None, alias="companionUrl", min_length=1)
    shared_secret: str | None = Field(default=None, alias="sharedSecret")
    auto_create_users: bool | None = Field(default=None, alias="autoCreateUsers")
    sync_admin_status: bool | None = Field(default=None, alias="syncAdminStatus")
    log_attempts: bool | None = Field(default=None, alias="logAttempts")

    @field_validator("shared_secret")
    @classmethod
    def _secret_is_header_safe(cls, v: str | None) -> str | None:
        # Sent verbatim as the X-API-Key header value.
        if v is not None and not all(" " <= c <= "~" for c in v):
            raise ValueError("sharedSecret must contain printable ASCII characters only")
        return v


class TestConnectionResponse(BaseModel):
    success: bool
    message: str
    timestamp: datetime


def outcome_response(outcome: VerificationOutcome) -> JSONResponse | ValidateSsoResponse:
    if isinstance(outcome, Verified):
        return ValidateSsoResponse(local_user_id=outcome.user_id, username=outcome.username)
    if isinstance(outcome, InvalidInput):
        return error_response(HTTP_400_BAD_REQUEST, "Token is required")
    if isinstance(outcome, Rejected):
        status_code, message = _REJECT_RESPONSES[outcome.reason]
        return error_response(status_code, message)
    if isinstance(outcome, Unavailable) and outcome.reason in (
        UnavailableReason.timeout,
        UnavailableReason.transport_error,
    ):
        return error_response(HTTP_503_SERVICE_UNAVAILABLE, "Companion app is unavailable")
    return error_response(
        HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error during token validation"
    )


@router.post("/validate", response_model=ValidateSsoResponse)
async def validate_token(
    body: ValidateSsoRequest | None = None,
    service: SsoVerificationService = Depends(sso_service_dep),
):
    outcome = await service.validate_token(body.token if body is not None else None)
    return outcome_response(outcome)


@router.get(
    "/config",
    response_model=SsoConfigResponse,
    dependencies=[Depends(require_admin)],
)
async def get_config(store: ConfigStore = Depends(config_store_dep)) -> SsoConfigResponse:
    return SsoConfigResponse.from_config(store.snapshot())


@router.put(
    "/config",
    response_model=SsoConfigResponse,
    dependencies=[Depends(require_admin)],
)
async def update_config(
    body: SsoConfigUpdate,
    store: ConfigStore = Depends(config_store_dep),
) -> SsoConfigResponse:
    changes = body.model_dump(exclude_none=True)
    if "companion_url" in changes:
        changes["companion_base_url"] = changes.pop("companion_url")
    updated = await store.update(**changes)
    return SsoConfigResponse.from_config(updated)


@router.get(
    "/test",
    response_model=TestConnectionResponse,
    dependencies=[Depends(require_admin)],
)
async def test_connection(
    service: SsoVerificationService = Depends(sso_service_dep),
):
    result = await service.test_connection()
    payload = TestConnectionResponse(
        success=result.success,
        message=result.message,
        timestamp=result.timestamp,
    )
    if result.success:
        return payload
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content=payload.model_dump(mode="json"))
