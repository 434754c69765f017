from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response

from office_chat.api.deps import ContactCacheDep, CurrentPrincipal, UoWDep
from office_chat.api.v1.schemas.contact import ContactResponse
from office_chat.api.v1.schemas.message import (
    MarkReadResponse,
    MessageResponse,
    SendMessageRequest,
    UnreadCountResponse,
)
from office_chat.application.dto.message import SendMessageDTO
from office_chat.config import settings
from office_chat.services import contact_service, message_service, read_state_service

router = APIRouter(prefix="/chat", tags=["chat"])

POLL_INTERVAL_HEADER = "X-Poll-Interval"


@router.post("/send", response_model=MessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    cache: ContactCacheDep,
) -> MessageResponse:
    msg = await message_service.send_message(
        principal,
        SendMessageDTO(recipient_id=body.recipient_id, content=body.content),
        uow,
        cache,
        max_length=settings.MESSAGE_MAX_LENGTH,
    )
    return MessageResponse.model_validate(msg)


@router.get("/conversation/{other_user_id}", response_model=list[MessageResponse])
async def get_conversation(
    other_user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    cache: ContactCacheDep,
    mark_read: bool = Query(True, alias="markRead"),
) -> list[MessageResponse]:
    messages = await message_service.open_conversation(
        principal, other_user_id, uow, cache, mark_read=mark_read,
    )
    return [MessageResponse.model_validate(m) for m in messages]


@router.get("/conversation/{other_user_id}/new", response_model=list[MessageResponse])
async def get_new_messages(
    other_user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    cache: ContactCacheDep,
    response: Response,
    since: UUID | None = Query(None),
    mark_read: bool = Query(True, alias="markRead"),
) -> list[MessageResponse]:
    messages = await message_service.poll_conversation(
        principal, other_user_id, since, uow, cache, mark_read=mark_read,
    )
    response.headers[POLL_INTERVAL_HEADER] = str(settings.POLL_INTERVAL_HINT)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("/conversation/{other_user_id}/mark-read", response_model=MarkReadResponse)
async def mark_conversation_read(
    other_user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    cache: ContactCacheDep,
) -> MarkReadResponse:
    updated = await read_state_service.mark_conversation_read(
        other_user_id, principal.user_id, uow, cache,
    )
    return MarkReadResponse(updated=updated)


@router.get("/conversation/{other_user_id}/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    other_user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> UnreadCountResponse:
    count = await read_state_service.unread_count(other_user_id, principal.user_id, uow)
    return UnreadCountResponse(count=count)


@router.get("/contacts", response_model=list[ContactResponse])
async def list_contacts(
    principal: CurrentPrincipal,
    uow: UoWDep,
    cache: ContactCacheDep,
) -> list[ContactResponse]:
    contacts = await contact_service.list_contacts(principal.user_id, uow, cache)
    return [ContactResponse.model_validate(c) for c in contacts]
