from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ContactEntry:
    """One row of a user's contact list, computed per request."""

    counterpart_id: UUID
    counterpart_name: str | None
    counterpart_email: str | None
    last_message_preview: str | None
    last_message_at: datetime
    unread_count: int = 0
