"""
Middleware package
"""
from helpdesk.middleware.logging_middleware import LoggingMiddleware
from helpdesk.middleware.auth import get_current_user, require_roles

__all__ = ["LoggingMiddleware", "get_current_user", "require_roles"]
