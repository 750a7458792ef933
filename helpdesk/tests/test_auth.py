"""Unit tests for sessions and auth"""
from datetime import datetime, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from supabase import AuthApiError

from helpdesk.exceptions import BackendError
from helpdesk.models.schemas import CurrentUser, Role
from helpdesk.services.auth import AuthService, SessionRegistry


@pytest.fixture
def auth_client():
    client = MagicMock()
    client.auth.get_user.return_value = SimpleNamespace(
        user=SimpleNamespace(
            id="user-1",
            email="ada@example.com",
            user_metadata={"full_name": "Ada Lovelace"},
        )
    )
    return client


@pytest.fixture
def role_repo():
    repo = MagicMock()
    repo.get_role_async = AsyncMock(return_value=Role.AGENT)
    return repo


@pytest.fixture
def registry():
    return SessionRegistry(ttl_seconds=300)


@pytest.fixture
def auth_service(auth_client, role_repo, registry):
    return AuthService(auth_client, role_repo, registry)


class TestSessionRegistry:
    def test_set_get_evict(self, registry):
        user = CurrentUser(id="u1")
        registry.set("token", user)

        assert registry.get("token") == user
        assert registry.evict("token") == user
        assert registry.get("token") is None

    def test_expired_entry_dropped(self, registry):
        registry.set("token", CurrentUser(id="u1"))
        registry._sessions["token"]["timestamp"] = datetime.now() - timedelta(seconds=301)

        assert registry.get("token") is None
        assert len(registry) == 0

    def test_set_purges_other_expired_tokens(self, registry):
        for i in range(1000):
            registry.set(f"old-{i}", CurrentUser(id=f"u{i}"))
        stale = datetime.now() - timedelta(seconds=301)
        for entry in registry._sessions.values():
            entry["timestamp"] = stale

        registry.set("fresh", CurrentUser(id="u-new"))

        assert registry.get("fresh").id == "u-new"
        assert len(registry) == 1

    def test_purge_keeps_live_entries(self, registry):
        registry.set("live", CurrentUser(id="u1"))
        registry.set("stale", CurrentUser(id="u2"))
        registry._sessions["stale"]["timestamp"] = datetime.now() - timedelta(seconds=301)

        assert registry.purge_expired() == 1
        assert registry.get("live").id == "u1"

    def test_clear(self, registry):
        registry.set("a", CurrentUser(id="u1"))
        registry.set("b", CurrentUser(id="u2"))
        registry.clear()
        assert len(registry) == 0


class TestAuthService:
    @pytest.mark.asyncio
    async def test_resolves_user_and_role(self, auth_service, auth_client, registry):
        user = await auth_service.get_current_user("jwt")

        assert user.id == "user-1"
        assert user.name == "Ada Lovelace"
        assert user.role == Role.AGENT
        auth_client.auth.get_user.assert_called_once_with("jwt")
        assert registry.get("jwt") == user

    @pytest.mark.asyncio
    async def test_cached_lookup(self, auth_service, auth_client):
        await auth_service.get_current_user("jwt")
        await auth_service.get_current_user("jwt")
        auth_client.auth.get_user.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_role_defaults_to_user(self, auth_service, role_repo):
        role_repo.get_role_async.return_value = None
        user = await auth_service.get_current_user("jwt")
        assert user.role == Role.USER

    @pytest.mark.asyncio
    async def test_invalid_token(self, auth_service, auth_client, registry):
        auth_client.auth.get_user.side_effect = AuthApiError("invalid JWT", 401, "bad_jwt")

        assert await auth_service.get_current_user("bad") is None
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_no_token(self, auth_service, auth_client):
        assert await auth_service.get_current_user(None) is None
        auth_client.auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_out_evicts_session(self, auth_service, auth_client, registry):
        await auth_service.get_current_user("jwt")

        await auth_service.sign_out("jwt")

        assert registry.get("jwt") is None
        auth_client.auth.admin.sign_out.assert_called_once_with("jwt")

    @pytest.mark.asyncio
    async def test_auth_outage_is_backend_error(self, auth_service, auth_client, registry):
        auth_client.auth.get_user.side_effect = ConnectionError("supabase unreachable")

        with pytest.raises(BackendError) as exc_info:
            await auth_service.get_current_user("jwt")

        assert exc_info.value.message == "supabase unreachable"
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_sign_out_failure_is_backend_error(self, auth_service, auth_client, registry):
        await auth_service.get_current_user("jwt")
        auth_client.auth.admin.sign_out.side_effect = ConnectionError("revoke failed")

        with pytest.raises(BackendError) as exc_info:
            await auth_service.sign_out("jwt")

        assert exc_info.value.message == "revoke failed"
        assert registry.get("jwt") is None
