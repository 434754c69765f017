from __future__ import annotations

import jwt

from office_chat.application.dto.principal import Principal
from office_chat.infrastructure.auth._claims import decode_kwargs, principal_from_claims


class HS256Verifier:
    """Verify tokens minted by the office Auth service with a shared secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        *,
        issuer: str | None = None,
        audience: str | None = None,
        leeway: int = 0,
    ) -> None:
        if not secret:
            raise ValueError("JWT_SECRET must be set when JWT_VERIFY_MODE=hs256")
        self._secret = secret
        self._algorithm = algorithm
        self._decode_kwargs = decode_kwargs(issuer=issuer, audience=audience, leeway=leeway)

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            **self._decode_kwargs,
        )
        return principal_from_claims(payload)
