"""
Comment Repository

Provides create/list utilities for the `comments` table. Comments are read
back oldest first, the order they are displayed in.
"""
from __future__ import annotations

import asyncio
from typing import List

from helpdesk.models.schemas import Comment
from helpdesk.repositories.base_repository import BaseRepository
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)


class CommentRepository(BaseRepository):
    """Repository for comments table operations."""

    table_name = "comments"

    def create(self, ticket_id: str, user_id: str, content: str) -> Comment:
        """Insert a comment on a ticket."""
        try:
            response = self.table() \
                .insert({
                    "ticket_id": ticket_id,
                    "user_id": user_id,
                    "content": content,
                }) \
                .execute()

            row = self._first(response)
            if row is None:
                raise ValueError("Supabase insert returned no data")

            comment = Comment(**row)
            logger.info("Added comment %s to ticket %s", comment.id, ticket_id)
            return comment

        except Exception as exc:
            self._handle_error(f"create_comment on {ticket_id}", exc)

    async def create_async(self, ticket_id: str, user_id: str, content: str) -> Comment:
        return await asyncio.to_thread(self.create, ticket_id, user_id, content)

    def list_by_ticket(self, ticket_id: str) -> List[Comment]:
        """Fetch a ticket's comments ordered by creation ascending."""
        try:
            response = self.table() \
                .select("*") \
                .eq("ticket_id", ticket_id) \
                .order("created_at", desc=False) \
                .execute()

            rows = response.data or []
            return [Comment(**row) for row in rows]

        except Exception as exc:
            self._handle_error(f"list_comments {ticket_id}", exc)

    async def list_by_ticket_async(self, ticket_id: str) -> List[Comment]:
        return await asyncio.to_thread(self.list_by_ticket, ticket_id)
