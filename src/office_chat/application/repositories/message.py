from __future__ import annotations

from typing import Protocol
from uuid import UUID

from office_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_messages(
        self,
        conversation_id: UUID,
        *,
        after: Message | None = None,
    ) -> list[Message]:
        """Messages in (sent_at, id) order, strictly after ``after`` if given.
        Sender and recipient names are resolved."""
        ...

    async def count_unread(self, sender_id: UUID, recipient_id: UUID) -> int: ...


class MessageWriter(Protocol):
    async def add(self, message: Message) -> None: ...

    async def mark_read(
        self,
        sender_id: UUID,
        recipient_id: UUID,
        *,
        up_to: Message | None = None,
    ) -> int:
        """Flip unread sender→recipient messages, optionally only those at or
        before ``up_to``. Return rows changed."""
        ...
