from __future__ import annotations

from datetime import datetime
from uuid import UUID

from office_chat.api.v1.schemas.common import CamelModel


class ContactResponse(CamelModel):
    counterpart_id: UUID
    counterpart_name: str | None
    counterpart_email: str | None
    last_message_preview: str | None
    last_message_at: datetime
    unread_count: int
