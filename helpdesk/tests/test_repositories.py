"""Unit tests for the Supabase repositories"""
from datetime import timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from helpdesk.exceptions import BackendError
from helpdesk.models.schemas import Priority, Role, TicketStatus
from helpdesk.repositories import (
    CommentRepository,
    ProfileRepository,
    RoleRepository,
    TicketRepository,
)
from helpdesk.tests.conftest import NOW, make_ticket, ticket_row


def comment_row(ticket_id: str, user_id: str = "user-1", minutes: int = 0) -> dict:
    return {
        "id": str(uuid4()),
        "ticket_id": ticket_id,
        "user_id": user_id,
        "content": "Any update?",
        "created_at": (NOW + timedelta(minutes=minutes)).isoformat(),
    }


class TestTicketRepository:
    @pytest.fixture
    def repo(self, mock_supabase):
        return TicketRepository(supabase_client=mock_supabase)

    def test_create_serializes_enums_and_datetimes(self, repo, mock_supabase):
        ticket = make_ticket(priority=Priority.URGENT)
        mock_supabase.execute.return_value = MagicMock(data=[ticket_row(ticket)])

        result = repo.create({
            "title": ticket.title,
            "priority": Priority.URGENT,
            "status": TicketStatus.OPEN,
            "sla_deadline": ticket.sla_deadline,
        })

        assert result.id == ticket.id
        mock_supabase.table.assert_called_with("tickets")
        payload = mock_supabase.insert.call_args[0][0]
        assert payload["priority"] == "urgent"
        assert payload["status"] == "open"
        assert payload["sla_deadline"] == ticket.sla_deadline.isoformat()

    def test_create_without_data_raises_backend_error(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(data=[])
        with pytest.raises(BackendError):
            repo.create({"title": "x"})

    def test_get_by_id_missing(self, repo, mock_supabase):
        assert repo.get_by_id("missing") is None
        mock_supabase.eq.assert_called_with("id", "missing")

    def test_list_tickets_scoped_to_creator(self, repo, mock_supabase):
        rows = [ticket_row(make_ticket()), ticket_row(make_ticket())]
        mock_supabase.execute.return_value = MagicMock(data=rows)

        result = repo.list_tickets(created_by="user-1")

        assert len(result) == 2
        mock_supabase.eq.assert_called_once_with("created_by", "user-1")
        mock_supabase.order.assert_called_once_with("created_at", desc=True)

    def test_list_tickets_unscoped(self, repo, mock_supabase):
        repo.list_tickets()
        mock_supabase.eq.assert_not_called()

    def test_backend_message_surfaced(self, repo, mock_supabase):
        mock_supabase.execute.side_effect = Exception("permission denied for table tickets")

        with pytest.raises(BackendError) as exc_info:
            repo.list_tickets()

        assert exc_info.value.message == "permission denied for table tickets"
        assert exc_info.value.details["table"] == "tickets"

    def test_update_clears_resolved_at(self, repo, mock_supabase):
        ticket = make_ticket(status=TicketStatus.OPEN)
        mock_supabase.execute.return_value = MagicMock(data=[ticket_row(ticket)])

        repo.update(ticket.id, {"status": TicketStatus.OPEN, "resolved_at": None})

        payload = mock_supabase.update.call_args[0][0]
        assert payload == {"status": "open", "resolved_at": None}

    def test_update_requires_fields(self, repo):
        with pytest.raises(ValueError):
            repo.update("t-1", {})

    @pytest.mark.asyncio
    async def test_async_wrapper(self, repo, mock_supabase):
        ticket = make_ticket()
        mock_supabase.execute.return_value = MagicMock(data=[ticket_row(ticket)])

        result = await repo.get_by_id_async(ticket.id)

        assert result.title == ticket.title


class TestCommentRepository:
    @pytest.fixture
    def repo(self, mock_supabase):
        return CommentRepository(supabase_client=mock_supabase)

    def test_list_by_ticket_oldest_first(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(
            data=[comment_row("t-1", minutes=0), comment_row("t-1", minutes=5)]
        )

        comments = repo.list_by_ticket("t-1")

        assert len(comments) == 2
        mock_supabase.table.assert_called_with("comments")
        mock_supabase.order.assert_called_once_with("created_at", desc=False)

    def test_create(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(data=[comment_row("t-1", "agent-1")])

        comment = repo.create("t-1", "agent-1", "Looking into it")

        assert comment.user_id == "agent-1"
        mock_supabase.insert.assert_called_once_with(
            {"ticket_id": "t-1", "user_id": "agent-1", "content": "Looking into it"}
        )


class TestProfileRepository:
    @pytest.fixture
    def repo(self, mock_supabase):
        return ProfileRepository(supabase_client=mock_supabase)

    def test_empty_ids_skip_query(self, repo, mock_supabase):
        assert repo.list_by_ids([]) == []
        mock_supabase.execute.assert_not_called()

    def test_distinct_ids_queried(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(data=[{"id": "u1", "full_name": "Ada"}])

        profiles = repo.list_by_ids(["u1", "u2", "u1"])

        assert [p.full_name for p in profiles] == ["Ada"]
        mock_supabase.in_.assert_called_once_with("id", ["u1", "u2"])


class TestRoleRepository:
    @pytest.fixture
    def repo(self, mock_supabase):
        return RoleRepository(supabase_client=mock_supabase)

    def test_get_role_deterministic_order(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(data=[{"user_id": "u1", "role": "agent"}])

        assert repo.get_role("u1") == Role.AGENT
        assert [c.args for c in mock_supabase.order.call_args_list] == [("created_at",), ("id",)]
        mock_supabase.limit.assert_called_once_with(1)

    def test_get_role_missing(self, repo):
        assert repo.get_role("u1") is None

    def test_set_role_upserts_on_user_id(self, repo, mock_supabase):
        mock_supabase.execute.return_value = MagicMock(data=[{"user_id": "u1", "role": "admin"}])

        result = repo.set_role("u1", Role.ADMIN)

        assert result.role == Role.ADMIN
        mock_supabase.upsert.assert_called_once_with(
            {"user_id": "u1", "role": "admin"}, on_conflict="user_id"
        )
