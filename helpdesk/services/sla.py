"""
SLA Progress Calculator

Maps (created_at, deadline, now) to the percentage of the SLA window already
used and a severity tier for the progress indicator. The percentage is
computed at request time only; nothing re-evaluates it in the background.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from helpdesk.models.schemas import (
    SLAProgress,
    SLASeverity,
    TicketStatus,
    TERMINAL_STATUSES,
)
from helpdesk.utils.rounding import round_half_up

CRITICAL_THRESHOLD = 80.0
WARNING_THRESHOLD = 50.0


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so aware and naive values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sla_deadline_for(created_at: datetime, window_hours: int = 24) -> datetime:
    """
    Deadline stamped on a ticket at creation.

    Args:
        created_at: Ticket creation time
        window_hours: SLA window length in hours

    Returns:
        created_at + window
    """
    return as_utc(created_at) + timedelta(hours=window_hours)


def elapsed_percentage(created_at: datetime, deadline: datetime, now: datetime) -> float:
    """
    Share of the SLA window elapsed at `now`, clamped to [0, 100].

    A zero-length (or inverted) window counts as already expired once
    `now` reaches created_at.
    """
    created_at = as_utc(created_at)
    deadline = as_utc(deadline)
    now = as_utc(now)

    total = (deadline - created_at).total_seconds()
    if total <= 0:
        return 100.0 if now >= created_at else 0.0

    elapsed = (now - created_at).total_seconds()
    return max(0.0, min(100.0, elapsed / total * 100))


def classify_severity(percentage: float, is_breached: bool = False) -> SLASeverity:
    """Breach flag wins; otherwise >80 critical, >50 warning, else normal."""
    if is_breached:
        return SLASeverity.BREACHED
    if percentage > CRITICAL_THRESHOLD:
        return SLASeverity.CRITICAL
    if percentage > WARNING_THRESHOLD:
        return SLASeverity.WARNING
    return SLASeverity.NORMAL


def compute_sla_progress(
    created_at: datetime,
    deadline: datetime,
    now: datetime,
    status: TicketStatus,
    is_breached: bool = False
) -> Optional[SLAProgress]:
    """
    Compute the SLA indicator for a ticket.

    Args:
        created_at: Ticket creation time
        deadline: Ticket SLA deadline
        now: Evaluation time
        status: Current ticket status
        is_breached: External breach flag

    Returns:
        SLAProgress, or None for resolved/closed tickets
    """
    if TicketStatus(status) in TERMINAL_STATUSES:
        return None

    percentage = elapsed_percentage(created_at, deadline, now)
    return SLAProgress(
        percentage=percentage,
        display_percentage=round_half_up(percentage),
        severity=classify_severity(percentage, is_breached),
    )


def ticket_sla_progress(ticket, now: Optional[datetime] = None) -> Optional[SLAProgress]:
    """Convenience wrapper taking a Ticket model."""
    return compute_sla_progress(
        ticket.created_at,
        ticket.sla_deadline,
        now or datetime.now(timezone.utc),
        ticket.status,
        ticket.is_sla_breached,
    )
