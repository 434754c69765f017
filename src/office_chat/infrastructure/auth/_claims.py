from __future__ import annotations

from typing import Any
from uuid import UUID

from office_chat.application.dto.principal import Principal

# .NET identity tokens carry the user id under these names instead of "sub"
_SUBJECT_CLAIMS = (
    "sub",
    "nameid",
    "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier",
)
_ROLE_CLAIMS = (
    "role",
    "http://schemas.microsoft.com/ws/2008/06/identity/claims/role",
)


def decode_kwargs(
    *,
    issuer: str | None,
    audience: str | None,
    leeway: int,
) -> dict[str, Any]:
    """Keyword arguments for ``jwt.decode`` shared by every verifier.

    Issuer and audience are only enforced when configured.
    """
    kwargs: dict[str, Any] = {
        "leeway": leeway,
        "options": {"verify_aud": audience is not None},
    }
    if issuer is not None:
        kwargs["issuer"] = issuer
    if audience is not None:
        kwargs["audience"] = audience
    return kwargs


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    subject = next((payload[c] for c in _SUBJECT_CLAIMS if payload.get(c)), None)
    if subject is None:
        raise ValueError("Token has no subject claim")
    return Principal(
        user_id=UUID(str(subject)),
        email=payload.get("email"),
        role=next((payload[c] for c in _ROLE_CLAIMS if payload.get(c)), None),
    )
