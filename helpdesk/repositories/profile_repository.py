"""
Profile Repository

Bulk display-name lookup on the `profiles` table. Results may be partial:
ids without a profile row are simply absent from the result.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, List

from helpdesk.models.schemas import Profile
from helpdesk.repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository):
    """Repository for profiles table operations."""

    table_name = "profiles"

    def list_by_ids(self, user_ids: Iterable[str]) -> List[Profile]:
        """Fetch profiles for a set of user ids."""
        ids = sorted(set(user_ids))
        if not ids:
            return []

        try:
            response = self.table() \
                .select("id, full_name") \
                .in_("id", ids) \
                .execute()

            rows = response.data or []
            return [Profile(**row) for row in rows]

        except Exception as exc:
            self._handle_error("list_profiles", exc)

    async def list_by_ids_async(self, user_ids: Iterable[str]) -> List[Profile]:
        return await asyncio.to_thread(self.list_by_ids, list(user_ids))
