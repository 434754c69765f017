from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Staff member as seen by chat. Owned by the auth service."""

    id: UUID
    name: str
    email: str
