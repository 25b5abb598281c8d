"""
sso_companion.db.session

Async SQLAlchemy engine, session factory and schema bootstrap.

Responsibilities:
- Create the async engine from settings.
- Create the async sessionmaker used by the bundled stores.
- Create tables in dev/test (production runs Alembic migrations).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sso_companion.db.models import Base
from sso_companion.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    return create_async_engine(settings.database_url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: stores hand out plain values read after commit.
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
