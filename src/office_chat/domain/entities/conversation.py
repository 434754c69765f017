from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from office_chat.domain.value_objects.conversation_key import ConversationKey


@dataclass(frozen=True, slots=True)
class Conversation:
    id: UUID
    user_low_id: UUID
    user_high_id: UUID
    last_message_id: UUID | None
    last_message_preview: str | None
    last_message_at: datetime | None
    created_at: datetime

    @property
    def key(self) -> ConversationKey:
        return ConversationKey(low=self.user_low_id, high=self.user_high_id)
