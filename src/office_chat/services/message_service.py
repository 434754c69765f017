from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

from office_chat.application.dto.message import SendMessageDTO
from office_chat.application.dto.principal import Principal
from office_chat.application.exceptions import AuthenticationError, ValidationError
from office_chat.application.policies.message_rules import (
    DEFAULT_MAX_LENGTH,
    validate_outgoing,
)
from office_chat.application.ports.cache import ContactCache
from office_chat.application.ports.clock import Clock, SystemClock
from office_chat.application.uow import UnitOfWork
from office_chat.domain.entities.conversation import Conversation
from office_chat.domain.entities.message import Message
from office_chat.domain.value_objects.conversation_key import canonical_key
from office_chat.domain.value_objects.enums import InvalidMessageReason
from office_chat.services import read_state_service

logger = logging.getLogger(__name__)

_system_clock = SystemClock()

# smallest step Postgres timestamptz can represent
_TICK = timedelta(microseconds=1)


async def send_message(
    principal: Principal,
    dto: SendMessageDTO,
    uow: UnitOfWork,
    cache: ContactCache,
    *,
    max_length: int = DEFAULT_MAX_LENGTH,
    clock: Clock = _system_clock,
) -> Message:
    """Validate and store a message, creating the conversation on first use.

    The returned message carries both display names.
    """
    sender_id = principal.user_id
    content = validate_outgoing(sender_id, dto.recipient_id, dto.content, max_length)

    users = await uow.users.get_many([sender_id, dto.recipient_id])
    sender = users.get(sender_id)
    if sender is None:
        raise AuthenticationError("Authenticated user is not a known staff member")
    recipient = users.get(dto.recipient_id)
    if recipient is None:
        raise ValidationError(
            "Recipient does not exist",
            reason=InvalidMessageReason.UNKNOWN_RECIPIENT,
        )

    conversation = await uow.conversations_w.get_or_create(
        canonical_key(sender_id, dto.recipient_id), clock.now(),
    )
    # (sent_at, id) order must match commit order; the row lock provides it
    now = _stamp_after(clock.now(), conversation.last_message_at)
    msg = Message(
        id=uuid.uuid4(),
        conversation_id=conversation.id,
        sender_id=sender_id,
        recipient_id=dto.recipient_id,
        content=content,
        sent_at=now,
        read=False,
        sender_name=sender.name,
        recipient_name=recipient.name,
    )
    await uow.messages_w.add(msg)
    await uow.conversations_w.touch_last_message(conversation.id, msg)
    await uow.commit()

    await cache.invalidate(sender_id, dto.recipient_id)
    logger.info(
        "Message %s sent %s -> %s in conversation %s",
        msg.id, sender_id, dto.recipient_id, conversation.id,
    )
    return msg


def _stamp_after(now: datetime, last_message_at: datetime | None) -> datetime:
    if last_message_at is not None and now <= last_message_at:
        return last_message_at + _TICK
    return now


async def get_history(
    user_a: uuid.UUID,
    user_b: uuid.UUID,
    uow: UnitOfWork,
) -> list[Message]:
    conversation = await uow.conversations.get_by_key(canonical_key(user_a, user_b))
    if conversation is None:
        return []
    return await uow.messages.list_messages(conversation.id)


async def get_new_since(
    user_a: uuid.UUID,
    user_b: uuid.UUID,
    after_message_id: uuid.UUID | None,
    uow: UnitOfWork,
) -> list[Message]:
    """Messages strictly after the watermark.

    A missing watermark, or one from another conversation, yields the whole
    history.
    """
    conversation = await uow.conversations.get_by_key(canonical_key(user_a, user_b))
    if conversation is None:
        return []
    return await _list_after(conversation, after_message_id, uow)


async def _list_after(
    conversation: Conversation,
    after_message_id: uuid.UUID | None,
    uow: UnitOfWork,
) -> list[Message]:
    watermark = None
    if after_message_id is not None:
        watermark = await uow.messages.get_by_id(after_message_id)
        if watermark is not None and watermark.conversation_id != conversation.id:
            logger.debug(
                "Ignoring watermark %s from conversation %s",
                after_message_id, watermark.conversation_id,
            )
            watermark = None
    return await uow.messages.list_messages(conversation.id, after=watermark)


async def open_conversation(
    principal: Principal,
    other_user_id: uuid.UUID,
    uow: UnitOfWork,
    cache: ContactCache,
    *,
    mark_read: bool = True,
) -> list[Message]:
    """History as shown to the caller; optionally marks what was shown as read."""
    return await poll_conversation(
        principal, other_user_id, None, uow, cache, mark_read=mark_read,
    )


async def poll_conversation(
    principal: Principal,
    other_user_id: uuid.UUID,
    since: uuid.UUID | None,
    uow: UnitOfWork,
    cache: ContactCache,
    *,
    mark_read: bool = True,
) -> list[Message]:
    conversation = await uow.conversations.get_by_key(
        canonical_key(principal.user_id, other_user_id)
    )
    if conversation is None:
        return []
    messages = await _list_after(conversation, since, uow)
    if mark_read:
        await _mark_shown(principal, conversation, messages, uow, cache)
    return messages


async def _mark_shown(
    principal: Principal,
    conversation: Conversation,
    messages: list[Message],
    uow: UnitOfWork,
    cache: ContactCache,
) -> None:
    # Bounded by the last returned message so anything that lands after the
    # fetch stays unread until the caller actually receives it.
    counterpart_id = conversation.key.other(principal.user_id)
    if not any(m.sender_id == counterpart_id and not m.read for m in messages):
        return
    await read_state_service.mark_conversation_read(
        counterpart_id, principal.user_id, uow, cache, up_to=messages[-1],
    )
