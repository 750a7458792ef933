"""
Base Repository

Shared Supabase client handling for the table repositories. Each repository
accepts an injected client (tests pass a MagicMock) and otherwise creates one
with the service-role key.
"""
from typing import Any, Dict, NoReturn, Optional

from helpdesk.config import get_settings
from helpdesk.exceptions import BackendError
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)
settings = get_settings()


class BaseRepository:
    """
    Base repository class for Supabase tables.

    Subclasses set `table_name` and build queries on `self.client`.
    """

    table_name: str = ""

    def __init__(self, supabase_client=None) -> None:
        if supabase_client is None:
            from supabase import create_client  # Lazy import for tests

            self.client = create_client(
                settings.supabase_url,
                settings.supabase_service_role_key or settings.supabase_key
            )
        else:
            self.client = supabase_client

        logger.info("%s initialized for table: %s", type(self).__name__, self.table_name)

    def table(self):
        return self.client.table(self.table_name)

    @staticmethod
    def _first(response) -> Optional[Dict[str, Any]]:
        """First row of a Supabase response, or None."""
        rows = getattr(response, "data", None) or []
        return rows[0] if rows else None

    def _handle_error(self, operation: str, error: Exception) -> NoReturn:
        """
        Centralized error handling for repository operations.

        Logs the failure and re-raises it as BackendError carrying the
        backend's own message.

        Args:
            operation: Description of failed operation
            error: Exception that occurred
        """
        if isinstance(error, BackendError):
            raise error
        message = getattr(error, "message", None) or str(error)
        logger.error("Repository error during %s on %s: %s", operation, self.table_name, message)
        raise BackendError(message, {"operation": operation, "table": self.table_name}) from error
