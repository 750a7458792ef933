"""
HelpDesk exceptions

Every failure is scoped to a single request: nothing here is retried and
nothing is fatal to the process. Handlers in helpdesk.main turn these into
ErrorResponse payloads.
"""
from typing import Any, Dict, Optional


class HelpdeskError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationRequiredError(HelpdeskError):
    """No signed-in user for an action that needs one."""

    status_code = 401
    error = "authentication_required"


class PermissionDeniedError(HelpdeskError):
    """The signed-in user's role does not allow the action."""

    status_code = 403
    error = "permission_denied"


class TicketNotFoundError(HelpdeskError):
    """Requested ticket does not exist (or is hidden by row-level security)."""

    status_code = 404
    error = "ticket_not_found"

    def __init__(self, ticket_id: str, details: Optional[Dict[str, Any]] = None):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket '{ticket_id}' not found", details)


class BackendError(HelpdeskError):
    """Supabase rejected a read or write. The message is surfaced verbatim."""

    status_code = 502
    error = "backend_error"
