"""
sso_companion.auth.deps

FastAPI dependencies for the privileged endpoints.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from sso_companion.api.deps import settings_dep
from sso_companion.auth.jwt import AdminTokenError, JwtConfig, principal_from_token
from sso_companion.auth.models import AdminPrincipal
from sso_companion.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def require_admin(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> AdminPrincipal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        principal = principal_from_token(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except AdminTokenError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    if not principal.is_admin:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Administrator role required")
    return principal
