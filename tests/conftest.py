"""
Pytest configuration and fixtures
"""
import pytest
from typing import Dict, Any


@pytest.fixture
def sample_ticket_row() -> Dict[str, Any]:
    """Ticket row as returned by Supabase"""
    return {
        "id": "0b8f8a6e-4f7c-4a53-9d55-2f1f3c8e9a10",
        "title": "User unable to login after password reset",
        "description": "Reset email arrives but the link says expired",
        "status": "open",
        "priority": "high",
        "created_at": "2025-11-05T12:00:00+00:00",
        "sla_deadline": "2025-11-06T12:00:00+00:00",
        "is_sla_breached": False,
        "created_by": "5d1c2f7e-0000-4000-8000-000000000001",
        "assigned_to": None,
        "resolved_at": None,
    }


@pytest.fixture
def sample_comment_row() -> Dict[str, Any]:
    """Comment row as returned by Supabase"""
    return {
        "id": "7e9b3a4c-1111-4222-8333-444455556666",
        "ticket_id": "0b8f8a6e-4f7c-4a53-9d55-2f1f3c8e9a10",
        "user_id": "5d1c2f7e-0000-4000-8000-000000000001",
        "content": "Tried again this morning, same error",
        "created_at": "2025-11-05T13:15:00+00:00",
    }
