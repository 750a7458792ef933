"""
Repositories package for Supabase operations

Provides repository classes for:
- tickets table (TicketRepository)
- comments table (CommentRepository)
- profiles table (ProfileRepository)
- user_roles table (RoleRepository)
"""
from helpdesk.repositories.base_repository import BaseRepository
from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.repositories.comment_repository import CommentRepository
from helpdesk.repositories.profile_repository import ProfileRepository
from helpdesk.repositories.role_repository import RoleRepository

__all__ = [
    "BaseRepository",
    "TicketRepository",
    "CommentRepository",
    "ProfileRepository",
    "RoleRepository",
]
