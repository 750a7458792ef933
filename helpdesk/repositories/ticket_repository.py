"""
Ticket Repository

CRUD utilities for the `tickets` table. Tickets are never hard-deleted, so
there is no delete operation.
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from helpdesk.models.schemas import Ticket
from helpdesk.repositories.base_repository import BaseRepository
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)


class TicketRepository(BaseRepository):
    """Repository for tickets table operations."""

    table_name = "tickets"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _serialize_payload(data: Dict[str, Any]) -> Dict[str, Any]:
        """Prepare payload for Supabase (convert enums and datetimes)."""
        serialized: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, Enum):
                serialized[key] = value.value
            elif isinstance(value, datetime):
                serialized[key] = value.isoformat()
            else:
                serialized[key] = value
        return serialized

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------
    def create(self, data: Dict[str, Any]) -> Ticket:
        """Insert a ticket and return the stored row."""
        try:
            response = self.table() \
                .insert(self._serialize_payload(data)) \
                .execute()

            row = self._first(response)
            if row is None:
                raise ValueError("Supabase insert returned no data")

            ticket = Ticket(**row)
            logger.info("Created ticket %s (%s)", ticket.id, ticket.priority.value)
            return ticket

        except Exception as exc:
            self._handle_error("create_ticket", exc)

    async def create_async(self, data: Dict[str, Any]) -> Ticket:
        return await asyncio.to_thread(self.create, data)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Fetch a ticket by id, None if absent."""
        try:
            response = self.table() \
                .select("*") \
                .eq("id", ticket_id) \
                .limit(1) \
                .execute()

            row = self._first(response)
            return Ticket(**row) if row else None

        except Exception as exc:
            self._handle_error(f"get_ticket {ticket_id}", exc)

    async def get_by_id_async(self, ticket_id: str) -> Optional[Ticket]:
        return await asyncio.to_thread(self.get_by_id, ticket_id)

    def list_tickets(self, created_by: Optional[str] = None) -> List[Ticket]:
        """
        List tickets, newest first.

        Args:
            created_by: Restrict to tickets opened by this user

        Returns:
            List of tickets ordered by created_at desc
        """
        try:
            query = self.table().select("*")
            if created_by:
                query = query.eq("created_by", created_by)

            response = query.order("created_at", desc=True).execute()

            rows = response.data or []
            return [Ticket(**row) for row in rows]

        except Exception as exc:
            self._handle_error("list_tickets", exc)

    async def list_tickets_async(self, created_by: Optional[str] = None) -> List[Ticket]:
        return await asyncio.to_thread(self.list_tickets, created_by)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------
    def update(self, ticket_id: str, fields: Dict[str, Any]) -> Ticket:
        """Apply a partial update and return the updated row."""
        if not fields:
            raise ValueError("No updates provided")

        try:
            response = self.table() \
                .update(self._serialize_payload(fields)) \
                .eq("id", ticket_id) \
                .execute()

            row = self._first(response)
            if row is None:
                # Some PostgREST setups return no representation on update
                row = self._first(
                    self.table().select("*").eq("id", ticket_id).limit(1).execute()
                )
            if row is None:
                raise ValueError(f"Ticket {ticket_id} not found")

            logger.info("Updated ticket %s fields=%s", ticket_id, sorted(fields))
            return Ticket(**row)

        except Exception as exc:
            self._handle_error(f"update_ticket {ticket_id}", exc)

    async def update_async(self, ticket_id: str, fields: Dict[str, Any]) -> Ticket:
        return await asyncio.to_thread(self.update, ticket_id, fields)
