"""
pytest configuration and shared fixtures
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from helpdesk.models.schemas import Priority, Ticket, TicketStatus

NOW = datetime(2025, 11, 5, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "requires_supabase: mark test as requiring Supabase service"
    )


def is_supabase_configured() -> bool:
    """Check if Supabase is configured"""
    from helpdesk.config import get_settings
    settings = get_settings()
    has_url = bool(settings.supabase_url and
                   not settings.supabase_url.startswith("https://your-"))
    has_key = bool(settings.supabase_key and
                   settings.supabase_key != "your_supabase_key_here")
    return has_url and has_key


requires_supabase = pytest.mark.skipif(
    not is_supabase_configured(),
    reason="Supabase service not configured (set SUPABASE_URL and SUPABASE_KEY)"
)


def make_ticket(
    title: str = "Cannot log in",
    description: str = "Password reset link is expired",
    status: TicketStatus = TicketStatus.OPEN,
    priority: Priority = Priority.MEDIUM,
    created_at: datetime = NOW,
    created_by: str = "user-1",
    **overrides
) -> Ticket:
    """Build a Ticket with a 24h SLA window."""
    data = {
        "id": str(uuid4()),
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "created_at": created_at,
        "sla_deadline": created_at + timedelta(hours=24),
        "created_by": created_by,
    }
    data.update(overrides)
    return Ticket(**data)


def ticket_row(ticket: Ticket) -> dict:
    """Ticket as Supabase returns it."""
    return ticket.model_dump(mode="json")


@pytest.fixture
def mock_supabase():
    """Mocked Supabase client"""
    client = MagicMock()

    # Table chainable methods
    client.table.return_value = client
    client.insert.return_value = client
    client.update.return_value = client
    client.upsert.return_value = client
    client.select.return_value = client
    client.eq.return_value = client
    client.in_.return_value = client
    client.order.return_value = client
    client.limit.return_value = client

    # Default execute response
    client.execute.return_value = MagicMock(data=[], count=0)

    return client
