"""
sso_companion.db.repositories.users

SQLAlchemy-backed local user store.

Responsibilities:
- `find_by_name` / `create` for the identity mapper.
- `set_privilege` for admin-sync.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sso_companion.db.models import UserAccount
from sso_companion.identity.models import LocalUser


def _to_local(account: UserAccount) -> LocalUser:
    return LocalUser(id=str(account.id), username=account.username, is_admin=account.is_admin)


class SqlUserStore:
    """
    Each call runs in its own short transaction; the store holds no session
    between calls so one instance serves every concurrent request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_name(self, username: str) -> LocalUser | None:
        async with self._session_factory() as session:
            stmt = select(UserAccount).where(UserAccount.username == username)
            account = (await session.execute(stmt)).scalar_one_or_none()
            return _to_local(account) if account is not None else None

    async def create(self, username: str) -> LocalUser:
        async with self._session_factory() as session:
            async with session.begin():
                account = UserAccount(username=username, is_admin=False)
                session.add(account)
                await session.flush()
            return _to_local(account)

    async def set_privilege(self, user_id: str, is_admin: bool) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                account = await session.get(UserAccount, uuid.UUID(user_id), with_for_update=True)
                if account is None:
                    raise LookupError(f"user {user_id} not found")
                account.is_admin = is_admin


# --- Module Notes -----------------------------------------------------------
# Exact-match lookup; case sensitivity follows the database collation.
