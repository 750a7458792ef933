"""
Tests for Pydantic schemas to verify validation logic
"""
import pytest
from pydantic import ValidationError

from helpdesk.models.schemas import (
    Comment,
    CommentCreate,
    CurrentUser,
    Priority,
    Role,
    SLAProgress,
    SLASeverity,
    StatusUpdate,
    Ticket,
    TicketCreate,
    TicketStatus,
    UserRole,
)


class TestTicket:
    """Test Ticket model parsing"""

    def test_parse_supabase_row(self, sample_ticket_row):
        ticket = Ticket(**sample_ticket_row)

        assert ticket.status == TicketStatus.OPEN
        assert ticket.priority == Priority.HIGH
        assert ticket.created_at.tzinfo is not None
        assert not ticket.is_terminal

    @pytest.mark.parametrize("status", ["resolved", "closed"])
    def test_terminal_statuses(self, sample_ticket_row, status):
        sample_ticket_row["status"] = status
        assert Ticket(**sample_ticket_row).is_terminal

    def test_unknown_status_rejected(self, sample_ticket_row):
        sample_ticket_row["status"] = "pending"
        with pytest.raises(ValidationError):
            Ticket(**sample_ticket_row)

    def test_null_description_rejected(self, sample_ticket_row):
        sample_ticket_row["description"] = None
        with pytest.raises(ValidationError):
            Ticket(**sample_ticket_row)


class TestTicketCreateValidation:
    """Test TicketCreate validation"""

    def test_default_priority_is_medium(self):
        data = TicketCreate(title="Printer", description="Out of toner")
        assert data.priority == Priority.MEDIUM

    def test_text_is_sanitized(self):
        data = TicketCreate(title=" VPN\x00 ", description=" drops hourly ")
        assert data.title == "VPN"
        assert data.description == "drops hourly"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            TicketCreate(title="   ", description="x")

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            TicketCreate(title="x" * 201, description="x")

    def test_invalid_priority(self):
        with pytest.raises(ValidationError):
            TicketCreate(title="x", description="y", priority="critical")


class TestComments:
    def test_parse_row(self, sample_comment_row):
        comment = Comment(**sample_comment_row)
        assert comment.content.startswith("Tried again")

    def test_blank_comment_rejected(self):
        with pytest.raises(ValidationError):
            CommentCreate(content="  \n ")

    def test_comment_too_long(self):
        with pytest.raises(ValidationError):
            CommentCreate(content="x" * 5001)


class TestRolesAndUsers:
    def test_staff_roles(self):
        assert not CurrentUser(id="u1").is_staff
        assert CurrentUser(id="u1", role=Role.AGENT).is_staff
        assert CurrentUser(id="u1", role="admin").is_staff

    def test_user_role_row(self):
        row = UserRole(user_id="u1", role="agent", created_at="2025-11-05T12:00:00Z")
        assert row.role == Role.AGENT

    def test_status_update(self):
        assert StatusUpdate(status="in_progress").status == TicketStatus.IN_PROGRESS


class TestSLAProgress:
    def test_percentage_bounds(self):
        with pytest.raises(ValidationError):
            SLAProgress(percentage=120, display_percentage=100, severity=SLASeverity.CRITICAL)
