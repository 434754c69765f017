"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from office_chat.application.dto.principal import Principal
from office_chat.application.ports.auth import TokenVerifier
from office_chat.application.ports.cache import ContactCache, NullContactCache
from office_chat.config import settings
from office_chat.infrastructure.auth.hs256_verifier import HS256Verifier
from office_chat.infrastructure.auth.jwks_verifier import JWKSVerifier
from office_chat.infrastructure.cache.redis_contacts import RedisContactCache
from office_chat.infrastructure.db.session import AsyncSessionLocal
from office_chat.infrastructure.db.uow import SqlAlchemyUoW

# auto_error=False so a missing header is a 401, not Starlette's 403
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_contact_cache(request: Request) -> ContactCache:
    redis = getattr(request.app.state, "redis", None)
    if redis is None or settings.CONTACTS_CACHE_TTL <= 0:
        return NullContactCache()
    return RedisContactCache(
        redis,
        ttl=settings.CONTACTS_CACHE_TTL,
        prefix=settings.CONTACTS_CACHE_PREFIX,
    )


ContactCacheDep = Annotated[ContactCache, Depends(get_contact_cache)]


def _get_verifier() -> TokenVerifier:
    claims = {
        "issuer": settings.JWT_ISSUER,
        "audience": settings.JWT_AUDIENCE,
        "leeway": settings.JWT_LEEWAY,
    }
    if settings.JWT_VERIFY_MODE == "jwks":
        if not settings.JWKS_URL:
            raise RuntimeError("JWKS_URL must be set when JWT_VERIFY_MODE=jwks")
        return JWKSVerifier(settings.JWKS_URL, **claims)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM, **claims)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> Principal:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
