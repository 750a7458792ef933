"""
Authentication and session state

SessionRegistry is the only process-wide mutable state in the service: it
caches resolved users per access token so each request does not round-trip
to Supabase auth. It is created in the application lifespan, written only by
AuthService and emptied at shutdown.
"""
import asyncio
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from supabase import AuthApiError

from helpdesk.exceptions import BackendError
from helpdesk.models.schemas import CurrentUser, Role
from helpdesk.repositories.role_repository import RoleRepository
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)


class SessionRegistry:
    """
    In-memory session cache with TTL.

    Features:
    - Per-token entries expiring after `ttl_seconds`
    - Explicit eviction on sign-out
    - Full clear at shutdown
    """

    def __init__(self, ttl_seconds: int = 300):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _is_valid(self, entry: Dict[str, Any]) -> bool:
        return datetime.now() - entry["timestamp"] < self.ttl

    def get(self, access_token: str) -> Optional[CurrentUser]:
        """Cached user for a token, None on miss or expiry."""
        entry = self._sessions.get(access_token)
        if entry is None:
            return None
        if not self._is_valid(entry):
            del self._sessions[access_token]
            return None
        return entry["user"]

    def purge_expired(self) -> int:
        """Drop every expired entry; rotated tokens are never read again."""
        expired = [token for token, entry in self._sessions.items() if not self._is_valid(entry)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    def set(self, access_token: str, user: CurrentUser) -> None:
        self.purge_expired()
        self._sessions[access_token] = {"user": user, "timestamp": datetime.now()}
        logger.debug("Cached session for user %s", user.id)

    def evict(self, access_token: str) -> Optional[CurrentUser]:
        entry = self._sessions.pop(access_token, None)
        return entry["user"] if entry else None

    def clear(self) -> None:
        count = len(self._sessions)
        self._sessions.clear()
        logger.info("Cleared %d cached sessions", count)


class AuthService:
    """Resolves access tokens to users and roles."""

    def __init__(self, auth_client, role_repo: RoleRepository, registry: SessionRegistry):
        """
        Args:
            auth_client: Supabase client (its `auth` API is used)
            role_repo: Role lookup
            registry: Session cache shared for the process lifetime
        """
        self.auth_client = auth_client
        self.role_repo = role_repo
        self.registry = registry

    def _fetch_user(self, access_token: str):
        """
        Supabase user for a token.

        Returns None when Supabase rejects the token. Any other failure
        (outage, network) is a BackendError.
        """
        try:
            response = self.auth_client.auth.get_user(access_token)
        except AuthApiError as exc:
            logger.info("Rejected access token: %s", exc.message)
            return None
        except Exception as exc:
            message = getattr(exc, "message", None) or str(exc)
            logger.error("Supabase auth error during get_user: %s", message)
            raise BackendError(message, {"operation": "get_user"}) from exc
        return getattr(response, "user", None)

    async def get_current_user(self, access_token: Optional[str]) -> Optional[CurrentUser]:
        """
        Resolve a bearer token to the signed-in user.

        Args:
            access_token: Supabase JWT from the Authorization header

        Returns:
            CurrentUser, or None when the token is missing or invalid
        """
        if not access_token:
            return None

        cached = self.registry.get(access_token)
        if cached is not None:
            return cached

        auth_user = await asyncio.to_thread(self._fetch_user, access_token)
        if auth_user is None:
            return None

        role = await self.role_repo.get_role_async(auth_user.id)
        metadata = getattr(auth_user, "user_metadata", None) or {}
        user = CurrentUser(
            id=auth_user.id,
            email=getattr(auth_user, "email", None),
            name=metadata.get("full_name"),
            role=role or Role.USER,
        )
        self.registry.set(access_token, user)
        logger.info("Signed-in user %s resolved with role %s", user.id, user.role.value)
        return user

    async def sign_out(self, access_token: str) -> None:
        """Forget the session locally and revoke it in Supabase."""
        user = self.registry.evict(access_token)
        try:
            await asyncio.to_thread(self.auth_client.auth.admin.sign_out, access_token)
        except Exception as exc:
            message = getattr(exc, "message", None) or str(exc)
            logger.error("Supabase auth error during sign_out: %s", message)
            raise BackendError(message, {"operation": "sign_out"}) from exc
        logger.info("Signed out user %s", user.id if user else "unknown")
