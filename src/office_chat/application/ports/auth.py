from __future__ import annotations

from typing import Protocol

from office_chat.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal:
        """Return the staff member the bearer token identifies.

        Any exception means the token is not acceptable.
        """
        ...
