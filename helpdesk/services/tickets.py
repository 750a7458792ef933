"""
Ticket Service

Ticket creation and the list endpoint: fetch the visible tickets (newest
first) and run them through the search/filter/sort/paginate pipeline.
"""
from datetime import datetime, timezone
from typing import Optional

from helpdesk.config import Settings, get_settings
from helpdesk.models.schemas import (
    CurrentUser,
    PaginatedResponse,
    Ticket,
    TicketCreate,
    TicketStatus,
    TicketSummary,
)
from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.services.sla import sla_deadline_for, ticket_sla_progress
from helpdesk.services.ticket_pipeline import TicketQuery, apply_ticket_query
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)


class TicketService:
    """Create and list tickets."""

    def __init__(self, ticket_repo: TicketRepository, settings: Optional[Settings] = None):
        self.ticket_repo = ticket_repo
        self.settings = settings or get_settings()

    async def create_ticket(
        self,
        user: CurrentUser,
        data: TicketCreate,
        now: Optional[datetime] = None
    ) -> Ticket:
        """
        Open a ticket for the signed-in user.

        The SLA deadline is fixed here and never recomputed.
        """
        created_at = now or datetime.now(timezone.utc)
        payload = {
            "title": data.title,
            "description": data.description,
            "priority": data.priority,
            "status": TicketStatus.OPEN,
            "created_by": user.id,
            "sla_deadline": sla_deadline_for(created_at, self.settings.sla_window_hours),
        }
        return await self.ticket_repo.create_async(payload)

    async def list_tickets(
        self,
        user: CurrentUser,
        query: TicketQuery,
        now: Optional[datetime] = None
    ) -> PaginatedResponse:
        """
        One page of the ticket list as seen by `user`.

        Users only see tickets they created; agents and admins see all.
        """
        created_by = None if user.is_staff else user.id
        tickets = await self.ticket_repo.list_tickets_async(created_by)

        page = apply_ticket_query(tickets, query)
        now = now or datetime.now(timezone.utc)
        logger.debug(
            "Ticket list for %s: %d matched, page %d/%d",
            user.id, page.total, page.page, page.total_pages
        )

        return PaginatedResponse(
            items=[
                TicketSummary(**t.model_dump(), sla=ticket_sla_progress(t, now))
                for t in page.items
            ],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
