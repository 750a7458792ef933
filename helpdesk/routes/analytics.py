"""
Analytics route (agent/admin only)
"""
from fastapi import APIRouter, Depends

from helpdesk.dependencies import get_ticket_repository
from helpdesk.middleware.auth import require_staff
from helpdesk.models.schemas import TicketStats
from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.services.analytics import compute_ticket_stats

router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["analytics"],
    dependencies=[Depends(require_staff)]
)


@router.get("", response_model=TicketStats)
async def get_ticket_stats(
    ticket_repo: TicketRepository = Depends(get_ticket_repository)
):
    """Counts per status and priority across all tickets."""
    tickets = await ticket_repo.list_tickets_async()
    return compute_ticket_stats(tickets)
