from __future__ import annotations

import logging
import uuid

from office_chat.application.ports.cache import ContactCache
from office_chat.application.uow import UnitOfWork
from office_chat.domain.entities.message import Message

logger = logging.getLogger(__name__)


async def unread_count(
    from_user_id: uuid.UUID,
    to_user_id: uuid.UUID,
    uow: UnitOfWork,
) -> int:
    """Messages sent by ``from_user_id`` that ``to_user_id`` has not read."""
    return await uow.messages.count_unread(from_user_id, to_user_id)


async def mark_conversation_read(
    from_user_id: uuid.UUID,
    to_user_id: uuid.UUID,
    uow: UnitOfWork,
    cache: ContactCache,
    *,
    up_to: Message | None = None,
) -> int:
    """Mark every unread from→to message as read. Idempotent.

    The opposite direction is left untouched. With ``up_to`` only messages
    at or before it in timeline order are affected.
    """
    updated = await uow.messages_w.mark_read(from_user_id, to_user_id, up_to=up_to)
    if not updated:
        return 0

    await uow.commit()
    await cache.invalidate(to_user_id)
    logger.debug("Marked %d messages %s -> %s as read", updated, from_user_id, to_user_id)
    return updated
