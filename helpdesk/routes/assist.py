"""
AI assist routes (agent/admin only)

- POST /api/v1/tickets/{ticket_id}/assist/summary
- POST /api/v1/tickets/{ticket_id}/assist/reply
"""
from fastapi import APIRouter, Depends

from helpdesk.dependencies import get_ai_provider, get_detail_service, valid_ticket_id
from helpdesk.middleware.auth import require_staff
from helpdesk.models.schemas import AIActionResponse, CurrentUser
from helpdesk.services.ai_actions import AIActionProvider
from helpdesk.services.ticket_detail import TicketDetailService
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/tickets", tags=["assist"])


@router.post("/{ticket_id}/assist/summary", response_model=AIActionResponse)
async def summarize_ticket(
    ticket_id: str = Depends(valid_ticket_id),
    user: CurrentUser = Depends(require_staff),
    detail_service: TicketDetailService = Depends(get_detail_service),
    ai_provider: AIActionProvider = Depends(get_ai_provider)
):
    """Summarize a ticket and its comments."""
    detail = await detail_service.get_detail(ticket_id, viewer=user)
    text = await ai_provider.summarize(detail.ticket, detail.comments)
    logger.info("Summary requested by %s for ticket %s", user.id, ticket_id)
    return AIActionResponse(ticket_id=ticket_id, kind="summary", text=text)


@router.post("/{ticket_id}/assist/reply", response_model=AIActionResponse)
async def suggest_reply(
    ticket_id: str = Depends(valid_ticket_id),
    user: CurrentUser = Depends(require_staff),
    detail_service: TicketDetailService = Depends(get_detail_service),
    ai_provider: AIActionProvider = Depends(get_ai_provider)
):
    """Draft a reply to the requester."""
    detail = await detail_service.get_detail(ticket_id, viewer=user)
    text = await ai_provider.suggest_reply(detail.ticket, detail.comments)
    logger.info("Reply suggestion requested by %s for ticket %s", user.id, ticket_id)
    return AIActionResponse(ticket_id=ticket_id, kind="reply", text=text)
