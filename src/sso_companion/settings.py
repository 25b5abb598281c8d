"""
sso_companion.settings

Process configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the service process.
- Seed the initial SSO configuration used until an administrator saves one.
- Hide secrets from repr/logging (JWT secret, companion shared secret).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SSO_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "sso-companion"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8096

    # Admin auth (bearer JWTs issued by the host)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "media-host"
    jwt_audience: str = "sso-companion"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence (local users + saved SSO configuration)
    database_url: str = "sqlite+aiosqlite:///./sso_companion.db"

    # Outbound companion calls
    companion_timeout_seconds: float = Field(default=10.0, gt=0)

    # Seed values for the SSO configuration snapshot.
    companion_base_url: str = "http://localhost:3000"
    shared_secret: str = Field(default="", repr=False)
    enabled: bool = True
    auto_create_users: bool = True
    sync_admin_status: bool = True
    log_attempts: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The SSO fields here are only seeds: once an administrator saves a configuration
# through `PUT /api/sso/config`, the persisted record wins on the next startup.
