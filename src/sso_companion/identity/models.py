"""
sso_companion.identity.models

Identity domain models.

Responsibilities:
- Parse/validate the companion's identity assertion (wire shape -> typed model).
- Define the local user record and the user-store protocol the mapper depends on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class RemoteIdentityAssertion(BaseModel):
    """
    Identity asserted by the companion app for one validated token.
    Never persisted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    username: str
    email: str | None = None
    is_admin: StrictBool = Field(default=False, alias="isAdmin")
    display_name: str | None = Field(default=None, alias="displayName")

    @field_validator("username")
    @classmethod
    def _username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username must be non-empty")
        return v

    @field_validator("is_admin", mode="before")
    @classmethod
    def _null_is_not_admin(cls, v: object) -> object:
        return False if v is None else v


@dataclass(frozen=True, slots=True)
class LocalUser:
    id: str
    username: str
    is_admin: bool = False


class UserStore(Protocol):
    async def find_by_name(self, username: str) -> LocalUser | None: ...

    async def create(self, username: str) -> LocalUser: ...


@runtime_checkable
class PrivilegeStore(Protocol):
    # Optional capability; only stores exposing it take part in admin-sync.
    async def set_privilege(self, user_id: str, is_admin: bool) -> None: ...


# --- Module Notes -----------------------------------------------------------
# The bundled SQLAlchemy store (`db.repositories.users`) implements both protocols.
