"""
Ticket analytics for the staff dashboard.
"""
from collections import Counter
from typing import Iterable

from helpdesk.models.schemas import Priority, Ticket, TicketStats, TicketStatus
from helpdesk.utils.rounding import round_half_up


def _percent(part: int, total: int) -> int:
    return round_half_up(part / total * 100) if total else 0


def compute_ticket_stats(tickets: Iterable[Ticket]) -> TicketStats:
    """
    Count tickets per status and priority.

    Args:
        tickets: Tickets to aggregate

    Returns:
        TicketStats; rates are whole percentages of the total (0 when empty)
    """
    tickets = list(tickets)
    statuses = Counter(t.status for t in tickets)
    priorities = Counter(t.priority for t in tickets)
    total = len(tickets)
    breached = sum(1 for t in tickets if t.is_sla_breached)

    return TicketStats(
        total=total,
        open=statuses[TicketStatus.OPEN],
        in_progress=statuses[TicketStatus.IN_PROGRESS],
        resolved=statuses[TicketStatus.RESOLVED],
        closed=statuses[TicketStatus.CLOSED],
        sla_breached=breached,
        urgent=priorities[Priority.URGENT],
        high=priorities[Priority.HIGH],
        medium=priorities[Priority.MEDIUM],
        low=priorities[Priority.LOW],
        resolved_rate=_percent(statuses[TicketStatus.RESOLVED], total),
        breach_rate=_percent(breached, total),
    )
