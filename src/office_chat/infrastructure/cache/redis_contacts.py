"""Redis-backed contact-list cache.

Best effort: Redis failures are logged and the caller falls back to the
database. Lists live under ``<prefix>:<user>:<generation>``; invalidation
bumps ``<prefix>:<user>:gen`` with INCR, which orphans the current list and
any write still in flight from a request that read the old generation.
"""
from __future__ import annotations

import logging
from uuid import UUID

import redis.asyncio as aioredis

from office_chat.domain.entities.contact import ContactEntry
from office_chat.infrastructure.cache.serializer import (
    deserialize_contacts,
    serialize_contacts,
)

logger = logging.getLogger(__name__)

# must outlive every list entry, or a reset counter could revive one
_GENERATION_TTL = 86400

# returned when the generation could not be read; ``set`` ignores it
_UNKNOWN_GENERATION = -1


class RedisContactCache:
    """Implements application.ports.cache.ContactCache."""

    def __init__(self, redis: aioredis.Redis, *, ttl: int, prefix: str) -> None:
        self._redis = redis
        self._ttl = ttl
        self._prefix = prefix
        self._generation_ttl = max(_GENERATION_TTL, ttl * 2)

    def _generation_key(self, user_id: UUID) -> str:
        return f"{self._prefix}:{user_id}:gen"

    def _list_key(self, user_id: UUID, generation: int) -> str:
        return f"{self._prefix}:{user_id}:{generation}"

    async def get(self, user_id: UUID) -> tuple[list[ContactEntry] | None, int]:
        try:
            generation = int(await self._redis.get(self._generation_key(user_id)) or 0)
            raw = await self._redis.get(self._list_key(user_id, generation))
        except (aioredis.RedisError, ValueError):
            logger.warning("Contacts cache read failed for %s", user_id, exc_info=True)
            return None, _UNKNOWN_GENERATION
        if raw is None:
            return None, generation
        try:
            return deserialize_contacts(raw), generation
        except (ValueError, KeyError, TypeError):
            logger.warning("Unreadable contacts cache entry for %s", user_id)
            await self.invalidate(user_id)
            return None, _UNKNOWN_GENERATION

    async def set(
        self, user_id: UUID, contacts: list[ContactEntry], generation: int,
    ) -> None:
        if generation == _UNKNOWN_GENERATION:
            return
        try:
            await self._redis.set(
                self._list_key(user_id, generation),
                serialize_contacts(contacts),
                ex=self._ttl,
            )
        except aioredis.RedisError:
            logger.warning("Contacts cache write failed for %s", user_id, exc_info=True)

    async def invalidate(self, *user_ids: UUID) -> None:
        try:
            for user_id in user_ids:
                key = self._generation_key(user_id)
                await self._redis.incr(key)
                await self._redis.expire(key, self._generation_ttl)
        except aioredis.RedisError:
            logger.warning("Contacts cache invalidation failed for %s", user_ids, exc_info=True)
