"""
sso_companion.auth.jwt

Bearer JWT handling for the administrative endpoints.

Responsibilities:
- Decode host-issued JWTs with strict claim requirements (iss/aud/exp/iat/sub).
- Normalize the payload into an `AdminPrincipal`.
- Mint tokens for local tooling and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from sso_companion.auth.models import AdminPrincipal
from sso_companion.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class AdminTokenError(Exception):
    pass


def issue_admin_token(
    *,
    cfg: JwtConfig,
    subject: str,
    roles: list[str],
    ttl: timedelta = timedelta(minutes=15),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "roles": roles,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def principal_from_token(*, cfg: JwtConfig, token: str) -> AdminPrincipal:
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={"require": ["exp", "iat", "iss", "aud", "sub"]},
        )
    except InvalidTokenError as e:
        raise AdminTokenError(str(e)) from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise AdminTokenError("empty subject")
    if not isinstance(roles_raw, list):
        raise AdminTokenError("roles claim must be a list")
    return AdminPrincipal(subject=subject, roles=frozenset(str(r) for r in roles_raw))
