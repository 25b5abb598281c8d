"""
sso_companion.config_store

Process-scoped holder for the SSO configuration snapshot.

Responsibilities:
- Hand out the current `SsoConfig` as one immutable snapshot per call.
- Apply administrator updates atomically (persist first, then swap the reference).
- Seed the snapshot from process settings or a previously saved record.
"""

from __future__ import annotations

import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Any, Protocol

from sso_companion.observability.logging import get_logger
from sso_companion.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SsoConfig:
    companion_base_url: str = "http://localhost:3000"
    shared_secret: str = dataclasses.field(default="", repr=False)
    enabled: bool = True
    auto_create_users: bool = True
    sync_admin_status: bool = True
    log_attempts: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> SsoConfig:
        return cls(
            companion_base_url=settings.companion_base_url,
            shared_secret=settings.shared_secret,
            enabled=settings.enabled,
            auto_create_users=settings.auto_create_users,
            sync_admin_status=settings.sync_admin_status,
            log_attempts=settings.log_attempts,
        )


class ConfigPersistence(Protocol):
    async def load(self) -> SsoConfig | None: ...

    async def save(self, config: SsoConfig) -> None: ...


_FIELDS = frozenset(f.name for f in dataclasses.fields(SsoConfig))


class ConfigStore:
    """
    Readers never lock: a snapshot is a frozen object and swapping the reference
    is a single assignment, so base URL and secret are always read together.
    """

    def __init__(self, initial: SsoConfig, *, persistence: ConfigPersistence | None = None) -> None:
        self._current = initial
        self._persistence = persistence
        self._write_lock = asyncio.Lock()

    def snapshot(self) -> SsoConfig:
        return self._current

    async def load(self) -> SsoConfig:
        if self._persistence is None:
            return self._current
        saved = await self._persistence.load()
        if saved is not None:
            self._current = saved
            log.info("sso_config_loaded", source="database")
        else:
            log.info("sso_config_loaded", source="settings")
        return self._current

    async def update(self, **changes: Any) -> SsoConfig:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValueError(f"unknown configuration fields: {sorted(unknown)}")
        if changes.get("shared_secret", "") is None:
            raise ValueError("shared_secret must be a string")

        async with self._write_lock:
            updated = dataclasses.replace(self._current, **changes)
            if self._persistence is not None:
                await self._persistence.save(updated)
            self._current = updated

        # Field names only; values may include the shared secret.
        log.info("sso_config_updated", fields=sorted(changes))
        return updated


# --- Module Notes -----------------------------------------------------------
# A failed save leaves the in-memory snapshot untouched, so memory and storage agree.
