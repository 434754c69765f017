from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from office_chat.domain.entities.contact import ContactEntry


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def serialize_contacts(contacts: list[ContactEntry]) -> str:
    rows = [
        {
            "counterpart_id": c.counterpart_id,
            "counterpart_name": c.counterpart_name,
            "counterpart_email": c.counterpart_email,
            "last_message_preview": c.last_message_preview,
            "last_message_at": c.last_message_at,
            "unread_count": c.unread_count,
        }
        for c in contacts
    ]
    return json.dumps(rows, cls=_Encoder)


def deserialize_contacts(raw: str | bytes) -> list[ContactEntry]:
    return [
        ContactEntry(
            counterpart_id=UUID(row["counterpart_id"]),
            counterpart_name=row["counterpart_name"],
            counterpart_email=row["counterpart_email"],
            last_message_preview=row["last_message_preview"],
            last_message_at=datetime.fromisoformat(row["last_message_at"]),
            unread_count=row["unread_count"],
        )
        for row in json.loads(raw)
    ]
