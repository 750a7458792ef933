"""
Ticket Detail Aggregator

Joins a ticket with its comments and their authors' display names, and
derives the SLA indicator and resolution duration shown on the detail view.
Status changes and new comments go through here as well, so the
resolved_at stamp stays consistent with the status.
"""
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from helpdesk.exceptions import BackendError, TicketNotFoundError
from helpdesk.models.schemas import (
    Comment,
    CommentView,
    CurrentUser,
    Ticket,
    TicketDetail,
    TicketStatus,
    TERMINAL_STATUSES,
)
from helpdesk.repositories.comment_repository import CommentRepository
from helpdesk.repositories.profile_repository import ProfileRepository
from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.services.sla import as_utc, ticket_sla_progress
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)

UNKNOWN_AUTHOR = "Unknown User"


def format_resolution_time(created_at: datetime, resolved_at: Optional[datetime]) -> Optional[str]:
    """
    Human-readable time to resolution.

    Args:
        created_at: Ticket creation time
        resolved_at: Resolution time, None while unresolved

    Returns:
        "{h}h {m}m" when at least an hour elapsed, "{m}m" otherwise,
        or None without a resolution time
    """
    if resolved_at is None:
        return None

    seconds = max(0, int((as_utc(resolved_at) - as_utc(created_at)).total_seconds()))
    hours, remainder = divmod(seconds, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


class TicketDetailService:
    """Builds ticket detail views and applies detail-view actions."""

    def __init__(
        self,
        ticket_repo: TicketRepository,
        comment_repo: CommentRepository,
        profile_repo: ProfileRepository
    ):
        self.ticket_repo = ticket_repo
        self.comment_repo = comment_repo
        self.profile_repo = profile_repo

    async def _get_visible_ticket(self, ticket_id: str, viewer: Optional[CurrentUser]) -> Ticket:
        """Fetch a ticket, hiding other users' tickets from non-staff viewers."""
        ticket = await self.ticket_repo.get_by_id_async(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        if viewer is not None and not viewer.is_staff and ticket.created_by != viewer.id:
            raise TicketNotFoundError(ticket_id)
        return ticket

    async def _author_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Resolve display names; a failed lookup leaves every author unresolved."""
        try:
            profiles = await self.profile_repo.list_by_ids_async(user_ids)
        except BackendError as exc:
            logger.warning("Profile lookup failed, using placeholder names: %s", exc.message)
            return {}
        return {p.id: p.full_name for p in profiles if p.full_name}

    async def get_detail(
        self,
        ticket_id: str,
        viewer: Optional[CurrentUser] = None,
        now: Optional[datetime] = None
    ) -> TicketDetail:
        """
        Aggregate a ticket with its comments.

        Args:
            ticket_id: Ticket to load
            viewer: Signed-in user; non-staff only see their own tickets
            now: Evaluation time for the SLA indicator

        Returns:
            TicketDetail with comments oldest first

        Raises:
            TicketNotFoundError: Ticket does not exist or is not visible
        """
        ticket = await self._get_visible_ticket(ticket_id, viewer)
        comments = await self.comment_repo.list_by_ticket_async(ticket_id)

        names = await self._author_names({c.user_id for c in comments}) if comments else {}
        views: List[CommentView] = [
            CommentView(**c.model_dump(), author_name=names.get(c.user_id, UNKNOWN_AUTHOR))
            for c in comments
        ]

        return TicketDetail(
            ticket=ticket,
            comments=views,
            sla=ticket_sla_progress(ticket, now or datetime.now(timezone.utc)),
            resolution_time=format_resolution_time(ticket.created_at, ticket.resolved_at),
        )

    async def update_status(
        self,
        ticket_id: str,
        status: TicketStatus,
        now: Optional[datetime] = None
    ) -> Ticket:
        """
        Change a ticket's status.

        Moving to resolved/closed stamps resolved_at in the same write;
        moving back to open/in_progress clears it.
        """
        status = TicketStatus(status)
        ticket = await self.ticket_repo.get_by_id_async(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        if ticket.status == status:
            return ticket

        fields = {"status": status}
        if status in TERMINAL_STATUSES:
            fields["resolved_at"] = now or datetime.now(timezone.utc)
        else:
            fields["resolved_at"] = None

        updated = await self.ticket_repo.update_async(ticket_id, fields)
        logger.info("Ticket %s status %s -> %s", ticket_id, ticket.status.value, status.value)
        return updated

    async def add_comment(
        self,
        ticket_id: str,
        user: CurrentUser,
        content: str
    ) -> Comment:
        """Append a comment as the signed-in user."""
        await self._get_visible_ticket(ticket_id, user)
        return await self.comment_repo.create_async(ticket_id, user.id, content)
