from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from office_chat.domain.entities.contact import ContactEntry
from office_chat.domain.entities.conversation import Conversation
from office_chat.domain.entities.message import Message
from office_chat.domain.value_objects.conversation_key import ConversationKey


class ConversationReader(Protocol):
    async def get_by_key(self, key: ConversationKey) -> Conversation | None: ...

    async def list_contacts(self, user_id: UUID) -> list[ContactEntry]:
        """Every counterpart of ``user_id`` with last-message metadata and
        the number of unread messages they sent, newest conversation first."""
        ...


class ConversationWriter(Protocol):
    async def get_or_create(
        self, key: ConversationKey, now: datetime
    ) -> Conversation:
        """Return the conversation for ``key``, inserting it if absent.

        The row stays locked until the transaction ends, so sends within one
        conversation commit one at a time.
        """
        ...

    async def touch_last_message(
        self, conversation_id: UUID, message: Message
    ) -> None:
        """Advance last-message metadata; never moves it back in time."""
        ...
