"""
Bearer-token authentication and role gating

Dependencies used by the routes:
- get_access_token: raw token from the Authorization header (optional)
- get_current_user: signed-in user, 401 when missing or invalid
- require_roles(...): signed-in user holding one of the roles, 403 otherwise

Example:
    >>> router = APIRouter(dependencies=[Depends(require_roles(Role.AGENT, Role.ADMIN))])
"""
from typing import Optional

from fastapi import Depends, Header

from helpdesk.dependencies import get_auth_service
from helpdesk.exceptions import AuthenticationRequiredError, PermissionDeniedError
from helpdesk.models.schemas import CurrentUser, Role
from helpdesk.services.auth import AuthService
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


async def get_access_token(
    authorization: Optional[str] = Header(None, description="Bearer <Supabase access token>")
) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer ...` header."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def get_current_user(
    access_token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> CurrentUser:
    """
    Resolve the signed-in user.

    Raises:
        AuthenticationRequiredError: No token, or Supabase rejected it
    """
    if not access_token:
        logger.warning("Request without bearer token")
        raise AuthenticationRequiredError("Missing bearer token. Sign in first.")

    user = await auth_service.get_current_user(access_token)
    if user is None:
        raise AuthenticationRequiredError("Invalid or expired access token")
    return user


def require_roles(*roles: Role):
    """Dependency factory allowing only the given roles."""
    allowed = frozenset(Role(r) for r in roles)

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning("User %s with role %s denied", user.id, user.role.value)
            raise PermissionDeniedError(
                "Your role does not allow this action",
                {"role": user.role.value, "allowed": sorted(r.value for r in allowed)}
            )
        return user

    return checker


require_staff = require_roles(Role.AGENT, Role.ADMIN)
require_requester = require_roles(Role.USER)
