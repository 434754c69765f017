from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from office_chat.api.v1.schemas.common import CamelModel


class SendMessageRequest(CamelModel):
    recipient_id: UUID
    # blank and length checks live in the service so they map to 400
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _missing_content_is_blank(cls, value: object) -> object:
        return "" if value is None else value


class MessageResponse(CamelModel):
    id: UUID
    content: str
    sent_at: datetime
    read: bool
    sender_id: UUID
    sender_name: str | None
    recipient_id: UUID
    recipient_name: str | None


class MarkReadResponse(CamelModel):
    updated: int


class UnreadCountResponse(CamelModel):
    count: int
