from __future__ import annotations

from enum import StrEnum


class InvalidMessageReason(StrEnum):
    SELF_MESSAGE = "self_message"
    EMPTY_CONTENT = "empty_content"
    CONTENT_TOO_LONG = "content_too_long"
    UNKNOWN_RECIPIENT = "unknown_recipient"
