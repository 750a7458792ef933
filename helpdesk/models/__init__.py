"""
Pydantic models for HelpDesk
"""

from helpdesk.models.schemas import (
    # Enums
    TicketStatus,
    Priority,
    Role,
    SortOrder,
    SLASeverity,
    TERMINAL_STATUSES,
    STAFF_ROLES,

    # Database Models
    Ticket,
    TicketCreate,
    StatusUpdate,
    Comment,
    CommentCreate,
    Profile,
    UserRole,
    CurrentUser,

    # API Models
    SLAProgress,
    TicketSummary,
    CommentView,
    TicketDetail,
    TicketStats,
    AIActionResponse,

    # Utility Models
    PaginatedResponse,
    ErrorResponse,
)

__all__ = [
    # Enums
    "TicketStatus",
    "Priority",
    "Role",
    "SortOrder",
    "SLASeverity",
    "TERMINAL_STATUSES",
    "STAFF_ROLES",

    # Database Models
    "Ticket",
    "TicketCreate",
    "StatusUpdate",
    "Comment",
    "CommentCreate",
    "Profile",
    "UserRole",
    "CurrentUser",

    # API Models
    "SLAProgress",
    "TicketSummary",
    "CommentView",
    "TicketDetail",
    "TicketStats",
    "AIActionResponse",

    # Utility Models
    "PaginatedResponse",
    "ErrorResponse",
]
