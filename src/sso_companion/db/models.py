"""
sso_companion.db.models

Persistence schema.

Responsibilities:
- UserAccount: local accounts matched or provisioned from SSO identities.
- SsoSettingsRecord: the administrator-saved SSO configuration (single row).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Integer, String, Text, Uuid as SAUuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

SETTINGS_ROW_ID = 1


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite drops tzinfo anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class UserAccount(Base):
    __tablename__ = "local_users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class SsoSettingsRecord(Base):
    __tablename__ = "sso_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)

    companion_base_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    shared_secret: Mapped[str] = mapped_column(Text, nullable=False, default="")
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False)
    auto_create_users: Mapped[bool] = mapped_column(Boolean, nullable=False)
    sync_admin_status: Mapped[bool] = mapped_column(Boolean, nullable=False)
    log_attempts: Mapped[bool] = mapped_column(Boolean, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


# --- Module Notes -----------------------------------------------------------
# Username uniqueness is enforced here; a concurrent first login for the same name
# fails one of the inserts, which the mapper reports as a store error.
