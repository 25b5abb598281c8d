"""
sso_companion.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the settings, config store and verification service built in the app lifespan.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sso_companion.config_store import ConfigStore
from sso_companion.services.sso_service import SsoVerificationService
from sso_companion.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def config_store_dep(request: Request) -> ConfigStore:
    return request.app.state.config_store  # type: ignore[attr-defined]


def sso_service_dep(request: Request) -> SsoVerificationService:
    return request.app.state.sso_service  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


# --- Module Notes -----------------------------------------------------------
# Everything on app.state is created once in `api.app.create_app`'s lifespan.
