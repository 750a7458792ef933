"""
Role Repository

Reads and writes the `user_roles` table. Each user has exactly one row:
writes upsert on user_id, so a grant replaces the previous role instead of
adding a competing row. Reads still apply a deterministic tie-break for
tables populated before the unique constraint existed.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from helpdesk.models.schemas import Role, UserRole
from helpdesk.repositories.base_repository import BaseRepository
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)


class RoleRepository(BaseRepository):
    """Repository for user_roles table operations."""

    table_name = "user_roles"

    def get_role(self, user_id: str) -> Optional[Role]:
        """
        Current role for a user.

        Returns:
            Role, or None when the user has no role row
        """
        try:
            response = self.table() \
                .select("user_id, role, created_at") \
                .eq("user_id", user_id) \
                .order("created_at", desc=True) \
                .order("id", desc=True) \
                .limit(1) \
                .execute()

            row = self._first(response)
            return Role(row["role"]) if row else None

        except Exception as exc:
            self._handle_error(f"get_role {user_id}", exc)

    async def get_role_async(self, user_id: str) -> Optional[Role]:
        return await asyncio.to_thread(self.get_role, user_id)

    def set_role(self, user_id: str, role: Role) -> UserRole:
        """Grant a role, replacing any existing one."""
        try:
            response = self.table() \
                .upsert(
                    {"user_id": user_id, "role": Role(role).value},
                    on_conflict="user_id"
                ) \
                .execute()

            row = self._first(response)
            if row is None:
                raise ValueError("Supabase upsert returned no data")

            logger.info("Set role for user %s to %s", user_id, row["role"])
            return UserRole(**row)

        except Exception as exc:
            self._handle_error(f"set_role {user_id}", exc)

    async def set_role_async(self, user_id: str, role: Role) -> UserRole:
        return await asyncio.to_thread(self.set_role, user_id, role)
