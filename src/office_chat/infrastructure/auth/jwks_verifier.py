from __future__ import annotations

import logging

import jwt
from jwt import PyJWKClient

from office_chat.application.dto.principal import Principal
from office_chat.infrastructure.auth._claims import decode_kwargs, principal_from_claims

logger = logging.getLogger(__name__)

_ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class JWKSVerifier:
    """Verify tokens against the Auth service's published signing keys."""

    def __init__(
        self,
        jwks_url: str,
        *,
        issuer: str | None = None,
        audience: str | None = None,
        leeway: int = 0,
    ) -> None:
        self._jwk_client = PyJWKClient(jwks_url, cache_keys=True)
        self._decode_kwargs = decode_kwargs(issuer=issuer, audience=audience, leeway=leeway)

    async def verify(self, token: str) -> Principal:
        signing_key = self._jwk_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=_ASYMMETRIC_ALGORITHMS,
            **self._decode_kwargs,
        )
        principal = principal_from_claims(payload)
        logger.debug("Verified token for user %s (kid=%s)", principal.user_id, signing_key.key_id)
        return principal
