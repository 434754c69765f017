"""Order-independent identity of a two-person conversation."""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ConversationKey:
    low: UUID
    high: UUID

    def other(self, user_id: UUID) -> UUID:
        """Return the counterpart of ``user_id`` within the pair."""
        if user_id == self.low:
            return self.high
        if user_id == self.high:
            return self.low
        raise ValueError(f"{user_id} is not part of this conversation")


def canonical_key(user_a: UUID, user_b: UUID) -> ConversationKey:
    """Sort the pair so that (a, b) and (b, a) map to the same key."""
    if user_a.bytes <= user_b.bytes:
        return ConversationKey(low=user_a, high=user_b)
    return ConversationKey(low=user_b, high=user_a)
