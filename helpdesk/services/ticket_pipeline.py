"""
Ticket list pipeline

Pure search -> filter -> sort -> paginate transform over an in-memory ticket
list. Order matters: search and filters narrow the list before it is sorted,
and sorting happens before slicing into pages.
"""
import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Union

from helpdesk.models.schemas import Priority, SortOrder, Ticket, TicketStatus

ALL = "all"
DEFAULT_PAGE_SIZE = 6

PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

StatusFilter = Union[TicketStatus, str]
PriorityFilter = Union[Priority, str]


@dataclass(frozen=True)
class TicketQuery:
    """Search, filter, sort and page selection for the ticket list."""
    text: str = ""
    status: StatusFilter = ALL
    priority: PriorityFilter = ALL
    sort: SortOrder = SortOrder.NEWEST
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class TicketPage:
    """One page of the filtered, sorted list."""
    items: List[Ticket]
    total: int
    page: int
    page_size: int
    total_pages: int


def _matches_text(ticket: Ticket, needle: str) -> bool:
    return needle in ticket.title.lower() or needle in (ticket.description or "").lower()


def search_tickets(tickets: Iterable[Ticket], text: str) -> List[Ticket]:
    """Case-insensitive substring match on title or description."""
    if not text:
        return list(tickets)
    needle = text.lower()
    return [t for t in tickets if _matches_text(t, needle)]


def filter_tickets(
    tickets: Iterable[Ticket],
    status: StatusFilter = ALL,
    priority: PriorityFilter = ALL
) -> List[Ticket]:
    """Exact status/priority match; the "all" sentinel disables a filter."""
    result = list(tickets)
    if status != ALL:
        wanted_status = TicketStatus(status)
        result = [t for t in result if t.status == wanted_status]
    if priority != ALL:
        wanted_priority = Priority(priority)
        result = [t for t in result if t.priority == wanted_priority]
    return result


def sort_tickets(tickets: Iterable[Ticket], order: SortOrder) -> List[Ticket]:
    """
    Stable sort by the requested order.

    Equal keys keep their input order (Python's sort is stable, and
    reverse=True preserves that stability too).
    """
    order = SortOrder(order)
    if order == SortOrder.NEWEST:
        return sorted(tickets, key=lambda t: t.created_at, reverse=True)
    if order == SortOrder.OLDEST:
        return sorted(tickets, key=lambda t: t.created_at)
    return sorted(tickets, key=lambda t: PRIORITY_RANK[t.priority])


def total_pages_for(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def clamp_page(page: int, total_pages: int) -> int:
    """Keep the page inside [1, last page]; an empty list has page 1."""
    return min(max(page, 1), max(total_pages, 1))


def paginate(tickets: List[Ticket], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> TicketPage:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(tickets)
    total_pages = total_pages_for(total, page_size)
    page = clamp_page(page, total_pages)
    start = (page - 1) * page_size
    return TicketPage(
        items=tickets[start:start + page_size],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


def apply_ticket_query(tickets: Iterable[Ticket], query: TicketQuery) -> TicketPage:
    """
    Run the full pipeline.

    Args:
        tickets: Base ticket list (not modified)
        query: Search/filter/sort/page selection

    Returns:
        TicketPage with the requested slice and page counts
    """
    result = search_tickets(tickets, query.text)
    result = filter_tickets(result, query.status, query.priority)
    result = sort_tickets(result, query.sort)
    return paginate(result, query.page, query.page_size)


# Fields whose change sends the list view back to page 1
_RESET_FIELDS = ("text", "status", "priority", "sort")


@dataclass(frozen=True)
class TicketListState:
    """
    List-view state.

    Any change to the search text, filters or sort order returns to page 1;
    a change to the page alone keeps the other inputs.
    """
    query: TicketQuery = TicketQuery()

    def update(self, **changes) -> "TicketListState":
        unknown = set(changes) - set(_RESET_FIELDS) - {"page", "page_size"}
        if unknown:
            raise TypeError(f"Unknown list-state fields: {sorted(unknown)}")

        resets = any(
            field in changes and changes[field] != getattr(self.query, field)
            for field in _RESET_FIELDS
        )
        if resets:
            changes["page"] = 1
        return TicketListState(query=replace(self.query, **changes))

    def reset(self) -> "TicketListState":
        return TicketListState(query=TicketQuery(page_size=self.query.page_size))

    def apply(self, tickets: Iterable[Ticket]) -> TicketPage:
        return apply_ticket_query(tickets, self.query)
