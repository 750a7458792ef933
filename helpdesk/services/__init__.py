"""
Services package

Business logic on top of the repositories: SLA progress, the ticket list
pipeline, ticket detail aggregation, analytics, auth and AI actions.
"""
from helpdesk.services.ai_actions import AIActionProvider, MockAIActions
from helpdesk.services.analytics import compute_ticket_stats
from helpdesk.services.auth import AuthService, SessionRegistry
from helpdesk.services.sla import compute_sla_progress, ticket_sla_progress
from helpdesk.services.ticket_detail import TicketDetailService, format_resolution_time
from helpdesk.services.ticket_pipeline import TicketListState, TicketQuery, apply_ticket_query
from helpdesk.services.tickets import TicketService

__all__ = [
    "AIActionProvider",
    "MockAIActions",
    "compute_ticket_stats",
    "AuthService",
    "SessionRegistry",
    "compute_sla_progress",
    "ticket_sla_progress",
    "TicketDetailService",
    "format_resolution_time",
    "TicketListState",
    "TicketQuery",
    "apply_ticket_query",
    "TicketService",
]
