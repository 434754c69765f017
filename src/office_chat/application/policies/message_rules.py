from __future__ import annotations

from uuid import UUID

from office_chat.application.exceptions import ValidationError
from office_chat.domain.value_objects.enums import InvalidMessageReason

DEFAULT_MAX_LENGTH = 1000


def validate_outgoing(
    sender_id: UUID,
    recipient_id: UUID,
    content: str,
    max_length: int,
) -> str:
    """Raise if the message may not be sent; return the trimmed content."""
    if sender_id == recipient_id:
        raise ValidationError(
            "Cannot send a message to yourself",
            reason=InvalidMessageReason.SELF_MESSAGE,
        )

    text = content.strip()
    if not text:
        raise ValidationError(
            "Message content must not be empty",
            reason=InvalidMessageReason.EMPTY_CONTENT,
        )
    if len(text) > max_length:
        raise ValidationError(
            f"Message content must not exceed {max_length} characters",
            reason=InvalidMessageReason.CONTENT_TOO_LONG,
        )
    return text
