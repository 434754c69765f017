from __future__ import annotations

import uuid

from office_chat.application.ports.cache import ContactCache
from office_chat.application.uow import UnitOfWork
from office_chat.domain.entities.contact import ContactEntry


async def list_contacts(
    user_id: uuid.UUID,
    uow: UnitOfWork,
    cache: ContactCache,
) -> list[ContactEntry]:
    """Everyone ``user_id`` has exchanged messages with, most recent first."""
    cached, generation = await cache.get(user_id)
    if cached is not None:
        return cached

    contacts = await uow.conversations.list_contacts(user_id)
    # stored under the generation read above; an invalidation since orphans it
    await cache.set(user_id, contacts, generation)
    return contacts
