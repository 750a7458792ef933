"""
Ticket API routes

- GET   /api/v1/tickets                      list (search, filter, sort, page)
- POST  /api/v1/tickets                      open a ticket (role user)
- GET   /api/v1/tickets/{ticket_id}          detail with comments and SLA
- PATCH /api/v1/tickets/{ticket_id}/status   status change (agent/admin)
- POST  /api/v1/tickets/{ticket_id}/comments add a comment
"""
from enum import Enum
from typing import Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query, status

from helpdesk.config import get_settings
from helpdesk.dependencies import get_detail_service, get_ticket_service, valid_ticket_id
from helpdesk.middleware.auth import get_current_user, require_requester, require_staff
from helpdesk.models.schemas import (
    Comment,
    CommentCreate,
    CurrentUser,
    PaginatedResponse,
    Priority,
    SortOrder,
    StatusUpdate,
    Ticket,
    TicketCreate,
    TicketDetail,
    TicketStatus,
)
from helpdesk.services.ticket_detail import TicketDetailService
from helpdesk.services.ticket_pipeline import ALL, TicketQuery
from helpdesk.services.tickets import TicketService

settings = get_settings()

router = APIRouter(prefix="/api/v1/tickets", tags=["tickets"])


def _parse_filter(name: str, value: str, enum_cls: Type[Enum]):
    """'all' or a member value of enum_cls; 422 otherwise."""
    if value == ALL:
        return ALL
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [ALL] + [m.value for m in enum_cls]
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {name} '{value}'. Expected one of: {', '.join(allowed)}"
        )


@router.get("", response_model=PaginatedResponse)
async def list_tickets(
    text: str = Query("", max_length=200, description="Case-insensitive title/description search"),
    status_filter: str = Query(ALL, alias="status", description="Ticket status or 'all'"),
    priority: str = Query(ALL, description="Priority or 'all'"),
    sort: SortOrder = Query(SortOrder.NEWEST),
    page: int = Query(1, description="1-based page; out-of-range values are clamped"),
    page_size: Optional[int] = Query(None, ge=1, le=100),
    user: CurrentUser = Depends(get_current_user),
    ticket_service: TicketService = Depends(get_ticket_service)
):
    """List tickets visible to the signed-in user."""
    query = TicketQuery(
        text=text,
        status=_parse_filter("status", status_filter, TicketStatus),
        priority=_parse_filter("priority", priority, Priority),
        sort=sort,
        page=page,
        page_size=page_size or settings.page_size,
    )
    return await ticket_service.list_tickets(user, query)


@router.post("", response_model=Ticket, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    payload: TicketCreate,
    user: CurrentUser = Depends(require_requester),
    ticket_service: TicketService = Depends(get_ticket_service)
):
    """Open a ticket. Only requesters (role user) may create tickets."""
    return await ticket_service.create_ticket(user, payload)


@router.get("/{ticket_id}", response_model=TicketDetail)
async def get_ticket(
    ticket_id: str = Depends(valid_ticket_id),
    user: CurrentUser = Depends(get_current_user),
    detail_service: TicketDetailService = Depends(get_detail_service)
):
    return await detail_service.get_detail(ticket_id, viewer=user)


@router.patch("/{ticket_id}/status", response_model=Ticket)
async def update_ticket_status(
    payload: StatusUpdate,
    ticket_id: str = Depends(valid_ticket_id),
    user: CurrentUser = Depends(require_staff),
    detail_service: TicketDetailService = Depends(get_detail_service)
):
    """Change status; resolved/closed stamps resolved_at."""
    return await detail_service.update_status(ticket_id, payload.status)


@router.post("/{ticket_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
async def add_comment(
    payload: CommentCreate,
    ticket_id: str = Depends(valid_ticket_id),
    user: CurrentUser = Depends(get_current_user),
    detail_service: TicketDetailService = Depends(get_detail_service)
):
    return await detail_service.add_comment(ticket_id, user, payload.content)
