"""
Pydantic models for HelpDesk

This module contains the Pydantic schemas matching the Supabase tables
(tickets, comments, profiles, user_roles) plus the API payloads built on top
of them: ticket list pages, ticket detail, SLA progress and analytics.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator, ConfigDict

from helpdesk.utils.validators import sanitize_input


# ============================================================================
# Enums
# ============================================================================

class TicketStatus(str, Enum):
    """Valid ticket statuses"""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


TERMINAL_STATUSES = frozenset({TicketStatus.RESOLVED, TicketStatus.CLOSED})


class Priority(str, Enum):
    """Valid ticket priorities"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Role(str, Enum):
    """Capability tier of a signed-in user"""
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


STAFF_ROLES = frozenset({Role.AGENT, Role.ADMIN})


class SortOrder(str, Enum):
    """Ticket list sort orders"""
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"


class SLASeverity(str, Enum):
    """Severity tier of the SLA progress indicator"""
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    BREACHED = "breached"


# ============================================================================
# Database Models (matching Supabase tables)
# ============================================================================

class Ticket(BaseModel):
    """
    Support ticket, matching the `tickets` table.

    Attributes:
        id: Ticket UUID
        title: Short summary written by the requester
        description: Full problem description
        status: Lifecycle status
        priority: Requester-chosen priority
        created_at: Creation timestamp
        sla_deadline: Fixed deadline stamped at creation (never recomputed)
        is_sla_breached: Breach flag maintained by an external process
        created_by: Requester user id
        assigned_to: Assignee user id (optional)
        resolved_at: Set when the ticket moves to resolved/closed
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Ticket identifier")
    title: str = Field(..., description="Ticket title")
    description: str = Field("", description="Ticket description")
    status: TicketStatus = Field(TicketStatus.OPEN, description="Ticket status")
    priority: Priority = Field(Priority.MEDIUM, description="Ticket priority")
    created_at: datetime = Field(..., description="Creation timestamp")
    sla_deadline: datetime = Field(..., description="SLA deadline")
    is_sla_breached: bool = Field(False, description="SLA breach flag")
    created_by: str = Field(..., description="Creator user id")
    assigned_to: Optional[str] = Field(None, description="Assignee user id")
    resolved_at: Optional[datetime] = Field(None, description="Resolution timestamp")

    @property
    def is_terminal(self) -> bool:
        """Resolved and closed tickets no longer run against the SLA."""
        return self.status in TERMINAL_STATUSES


class TicketCreate(BaseModel):
    """Payload for opening a ticket"""
    title: str = Field(..., min_length=1, max_length=200, description="Ticket title")
    description: str = Field(..., min_length=1, max_length=10000, description="Ticket description")
    priority: Priority = Field(Priority.MEDIUM, description="Ticket priority")

    @field_validator('title', 'description')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Strip null bytes and whitespace; reject blank text."""
        cleaned = sanitize_input(v)
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned


class StatusUpdate(BaseModel):
    """Payload for an agent/admin status change"""
    status: TicketStatus = Field(..., description="New ticket status")


class Comment(BaseModel):
    """Ticket comment, matching the `comments` table"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    ticket_id: str
    user_id: str
    content: str
    created_at: datetime


class CommentCreate(BaseModel):
    """Payload for adding a comment"""
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        cleaned = sanitize_input(v, max_length=5000)
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned


class Profile(BaseModel):
    """Author display record, matching the `profiles` table"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: Optional[str] = None


class UserRole(BaseModel):
    """Role grant, matching the `user_roles` table (one row per user)"""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: Role
    created_at: Optional[datetime] = None


class CurrentUser(BaseModel):
    """Signed-in user resolved from a Supabase access token"""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Role = Role.USER

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


# ============================================================================
# API Models
# ============================================================================

class SLAProgress(BaseModel):
    """SLA progress indicator for an active ticket"""
    percentage: float = Field(..., ge=0.0, le=100.0, description="Elapsed share of the SLA window")
    display_percentage: int = Field(..., ge=0, le=100, description="Rounded percentage for display")
    severity: SLASeverity = Field(..., description="Indicator severity tier")


class TicketSummary(Ticket):
    """Ticket as shown in the list, with its SLA indicator"""
    sla: Optional[SLAProgress] = Field(None, description="SLA indicator (None when resolved/closed)")


class CommentView(Comment):
    """Comment joined with its author's display name"""
    author_name: str = Field(..., description="Author display name")


class TicketDetail(BaseModel):
    """Ticket joined with its comments and derived display fields"""
    ticket: Ticket
    comments: List[CommentView] = Field(default_factory=list)
    sla: Optional[SLAProgress] = None
    resolution_time: Optional[str] = Field(None, description="e.g. '3h 12m' or '45m'")


class TicketStats(BaseModel):
    """Aggregate ticket counts for the analytics dashboard"""
    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
    sla_breached: int = 0
    urgent: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    resolved_rate: int = Field(0, description="Resolved tickets, whole percent of total")
    breach_rate: int = Field(0, description="SLA-breached tickets, whole percent of total")


class AIActionResponse(BaseModel):
    """Text produced by an AI action"""
    ticket_id: str
    kind: str = Field(..., description="summary | reply")
    text: str


# ============================================================================
# Pagination Models
# ============================================================================

class PaginatedResponse(BaseModel):
    """Generic paginated response wrapper"""
    model_config = ConfigDict(from_attributes=True)

    items: List[TicketSummary] = Field(..., description="List of items")
    total: int = Field(..., ge=0, description="Total number of items")
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, description="Items per page")
    total_pages: int = Field(..., ge=0, description="Total number of pages")


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    model_config = ConfigDict(from_attributes=True)

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    detail: Optional[dict] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
