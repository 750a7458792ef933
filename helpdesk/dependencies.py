"""
FastAPI dependency providers

Services are built once in the application lifespan and stored on
app.state; routes pull them through these functions so tests can swap any of
them with app.dependency_overrides.
"""
from fastapi import HTTPException, Request, status

from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.services.ai_actions import AIActionProvider
from helpdesk.services.auth import AuthService
from helpdesk.services.ticket_detail import TicketDetailService
from helpdesk.services.tickets import TicketService
from helpdesk.utils.validators import validate_ticket_id


def get_ticket_repository(request: Request) -> TicketRepository:
    return request.app.state.ticket_repo


def get_ticket_service(request: Request) -> TicketService:
    return request.app.state.ticket_service


def get_detail_service(request: Request) -> TicketDetailService:
    return request.app.state.detail_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_ai_provider(request: Request) -> AIActionProvider:
    return request.app.state.ai_provider


def valid_ticket_id(ticket_id: str) -> str:
    """Path parameter check: ticket ids are UUIDs."""
    if not validate_ticket_id(ticket_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid ticket id '{ticket_id}'"
        )
    return ticket_id
