"""
sso_companion.api.app

FastAPI app factory for the SSO Companion service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Create and dispose shared infrastructure (DB engine, pooled companion HTTP client).
- Compose the verification service from its collaborators (single composition root).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from sso_companion import __version__
from sso_companion.api.errors import register_error_handlers
from sso_companion.api.routers.health import router as health_router
from sso_companion.api.routers.sso import router as sso_router
from sso_companion.companion_clients.companion_http import CompanionClient
from sso_companion.config_store import ConfigStore, SsoConfig
from sso_companion.db.repositories.sso_settings import SqlConfigPersistence
from sso_companion.db.repositories.users import SqlUserStore
from sso_companion.db.session import create_engine, create_sessionmaker, create_tables
from sso_companion.identity.models import UserStore
from sso_companion.observability.logging import configure_logging, get_logger
from sso_companion.observability.middleware import RequestContextMiddleware
from sso_companion.services.sso_service import SsoVerificationService
from sso_companion.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    companion_transport: httpx.AsyncBaseTransport | None = None,
    user_store: UserStore | None = None,
) -> FastAPI:
    """
    `companion_transport` replaces the network transport of the shared companion
    client; `user_store` replaces the bundled SQL user store (host integration).
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await create_tables(engine)

        config_store = ConfigStore(
            SsoConfig.from_settings(settings),
            persistence=SqlConfigPersistence(sessionmaker),
        )
        await config_store.load()

        # One pooled client for the process; per-call timeout and headers are set by CompanionClient.
        http = httpx.AsyncClient(transport=companion_transport)

        app.state.settings = settings
        app.state.engine = engine
        app.state.sessionmaker = sessionmaker
        app.state.config_store = config_store
        app.state.sso_service = SsoVerificationService(
            config_store=config_store,
            client=CompanionClient(http=http, timeout_seconds=settings.companion_timeout_seconds),
            user_store=user_store or SqlUserStore(sessionmaker),
        )
        try:
            yield
        finally:
            await http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="SSO Companion",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(sso_router)

    return app


# --- Module Notes -----------------------------------------------------------
# The verification service never reaches for a global: everything it needs is
# handed to its constructor here and looked up by routers via `api.deps`.
