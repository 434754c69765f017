from __future__ import annotations

from typing import Protocol
from uuid import UUID

from office_chat.domain.entities.contact import ContactEntry


class ContactCache(Protocol):
    """Per-user cache of the contact list.

    Entries must be dropped whenever a message is sent to or from the user,
    or the user marks a conversation read. Each drop starts a new generation;
    a list is stored under the generation it was computed in, so a list read
    from the database before a drop is never served after it.
    """

    async def get(self, user_id: UUID) -> tuple[list[ContactEntry] | None, int]:
        """Cached list (None on a miss) and the generation to hand to ``set``."""
        ...

    async def set(
        self, user_id: UUID, contacts: list[ContactEntry], generation: int,
    ) -> None: ...

    async def invalidate(self, *user_ids: UUID) -> None: ...


class NullContactCache:
    """Cache that never hits. Used when caching is disabled."""

    async def get(self, user_id: UUID) -> tuple[list[ContactEntry] | None, int]:
        return None, 0

    async def set(
        self, user_id: UUID, contacts: list[ContactEntry], generation: int,
    ) -> None:
        return None

    async def invalidate(self, *user_ids: UUID) -> None:
        return None
