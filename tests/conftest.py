"""
tests.conftest

Shared fixtures: an in-process companion app stub and in-memory user stores.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from sso_companion.companion_clients.companion_http import CompanionClient
from sso_companion.config_store import ConfigStore, SsoConfig
from sso_companion.identity.models import LocalUser

COMPANION_URL = "http://companion.test"
SHARED_SECRET = "s3cret"


class CompanionStub:
    """Plays the companion app behind `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"username": "alice", "email": "alice@example.com", "isAdmin": False}
        self.raw: bytes | None = None
        self.error: type[httpx.TransportError] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated failure", request=request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeUserStore:
    def __init__(
        self,
        users: list[LocalUser] | None = None,
        *,
        fail_lookup: bool = False,
        fail_create: bool = False,
    ) -> None:
        self.users = {u.username: u for u in users or []}
        self.lookups: list[str] = []
        self.created: list[str] = []
        self.fail_lookup = fail_lookup
        self.fail_create = fail_create

    async def find_by_name(self, username: str) -> LocalUser | None:
        self.lookups.append(username)
        if self.fail_lookup:
            raise RuntimeError("user table unavailable")
        return self.users.get(username)

    async def create(self, username: str) -> LocalUser:
        self.created.append(username)
        if self.fail_create:
            raise RuntimeError("insert failed")
        user = LocalUser(id=f"new-{username}", username=username)
        self.users[username] = user
        return user


class PrivilegedFakeUserStore(FakeUserStore):
    def __init__(self, *args: Any, fail_privilege: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.privilege_calls: list[tuple[str, bool]] = []
        self.fail_privilege = fail_privilege

    async def set_privilege(self, user_id: str, is_admin: bool) -> None:
        self.privilege_calls.append((user_id, is_admin))
        if self.fail_privilege:
            raise RuntimeError("policy update rejected")


@pytest.fixture
def sso_config() -> SsoConfig:
    return SsoConfig(companion_base_url=COMPANION_URL, shared_secret=SHARED_SECRET)


@pytest.fixture
def config_store(sso_config: SsoConfig) -> ConfigStore:
    return ConfigStore(sso_config)


@pytest.fixture
def companion() -> CompanionStub:
    return CompanionStub()


@pytest.fixture
def companion_client(companion: CompanionStub) -> CompanionClient:
    return CompanionClient(http=httpx.AsyncClient(transport=companion.transport))


@pytest.fixture
def make_store() -> Callable[..., FakeUserStore]:
    def _make(*, privileged: bool = True, **kwargs: Any) -> FakeUserStore:
        if privileged:
            return PrivilegedFakeUserStore(**kwargs)
        return FakeUserStore(**kwargs)

    return _make
