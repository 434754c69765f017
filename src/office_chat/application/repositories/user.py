from __future__ import annotations

from typing import Iterable, Protocol
from uuid import UUID

from office_chat.domain.entities.user import User


class UserReader(Protocol):
    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]: ...
