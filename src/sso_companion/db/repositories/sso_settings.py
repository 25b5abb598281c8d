"""
sso_companion.db.repositories.sso_settings

Persistence for the administrator-saved SSO configuration.

Responsibilities:
- Load the single saved configuration row (if any) as an `SsoConfig`.
- Upsert the row when an administrator changes the configuration.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sso_companion.config_store import SsoConfig
from sso_companion.db.models import SETTINGS_ROW_ID, SsoSettingsRecord


class SqlConfigPersistence:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load(self) -> SsoConfig | None:
        async with self._session_factory() as session:
            row = await session.get(SsoSettingsRecord, SETTINGS_ROW_ID)
            if row is None:
                return None
            return SsoConfig(
                companion_base_url=row.companion_base_url,
                shared_secret=row.shared_secret or "",
                enabled=row.enabled,
                auto_create_users=row.auto_create_users,
                sync_admin_status=row.sync_admin_status,
                log_attempts=row.log_attempts,
            )

    async def save(self, config: SsoConfig) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                row = await session.get(SsoSettingsRecord, SETTINGS_ROW_ID, with_for_update=True)
                if row is None:
                    row = SsoSettingsRecord(id=SETTINGS_ROW_ID)
                    session.add(row)
                row.companion_base_url = config.companion_base_url
                row.shared_secret = config.shared_secret
                row.enabled = config.enabled
                row.auto_create_users = config.auto_create_users
                row.sync_admin_status = config.sync_admin_status
                row.log_attempts = config.log_attempts
