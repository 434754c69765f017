from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    recipient_id: UUID
    content: str
    sent_at: datetime
    read: bool = False
    # resolved from the user directory, not stored on the row
    sender_name: str | None = None
    recipient_name: str | None = None
