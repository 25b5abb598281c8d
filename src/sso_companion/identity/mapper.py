"""
sso_companion.identity.mapper

Maps a verified remote identity onto a local user account.

Responsibilities:
- Look up the asserted username in the local user store.
- Apply the auto-create policy for unknown identities.
- Apply the admin-sync policy (best effort; never fails the verification).
"""

from __future__ import annotations

from sso_companion.config_store import SsoConfig
from sso_companion.identity.models import LocalUser, PrivilegeStore, RemoteIdentityAssertion, UserStore
from sso_companion.observability.logging import get_logger
from sso_companion.outcomes import (
    Rejected,
    RejectReason,
    Unavailable,
    UnavailableReason,
    VerificationOutcome,
    Verified,
)

log = get_logger(__name__)


class IdentityMapper:
    async def resolve(
        self,
        assertion: RemoteIdentityAssertion,
        config: SsoConfig,
        user_store: UserStore,
    ) -> VerificationOutcome:
        username = assertion.username

        try:
            user = await user_store.find_by_name(username)
        except Exception as e:
            log.error("user_lookup_failed", username=username, error=str(e))
            return Unavailable(UnavailableReason.store_error, detail="user lookup failed")

        if user is None:
            if not config.auto_create_users:
                if config.log_attempts:
                    log.warning("sso_provisioning_denied", username=username)
                return Rejected(RejectReason.unknown_user)

            try:
                # Username is the only seed attribute.
                user = await user_store.create(username)
            except Exception as e:
                # Provisioning failure is an infrastructure fault, not a denial.
                log.error("sso_user_create_failed", username=username, error=str(e))
                return Unavailable(UnavailableReason.store_error, detail="user creation failed")
            if config.log_attempts:
                log.info("sso_user_created", username=username, user_id=user.id)
        elif config.log_attempts:
            log.info("sso_user_matched", username=username, user_id=user.id)

        if config.sync_admin_status:
            await self._sync_admin(user, assertion, user_store)

        return Verified(user_id=user.id, username=username)

    async def _sync_admin(
        self,
        user: LocalUser,
        assertion: RemoteIdentityAssertion,
        user_store: UserStore,
    ) -> None:
        if not isinstance(user_store, PrivilegeStore):
            return
        if user.is_admin == assertion.is_admin:
            return
        try:
            await user_store.set_privilege(user.id, assertion.is_admin)
        except Exception as e:
            log.warning(
                "sso_admin_sync_failed",
                username=user.username,
                user_id=user.id,
                error=str(e),
            )
            return
        log.info(
            "sso_admin_synced",
            username=user.username,
            user_id=user.id,
            is_admin=assertion.is_admin,
        )


# --- Module Notes -----------------------------------------------------------
# Admin-sync runs for both matched and newly created users; the new user is created
# with the store's default privilege and then promoted if the assertion says so.
