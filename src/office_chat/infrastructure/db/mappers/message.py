from __future__ import annotations

from office_chat.domain.entities.message import Message
from office_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(
    model: MessageModel,
    sender_name: str | None = None,
    recipient_name: str | None = None,
) -> Message:
    return Message(
        id=model.id,
        conversation_id=model.conversation_id,
        sender_id=model.sender_id,
        recipient_id=model.recipient_id,
        content=model.content,
        sent_at=model.sent_at,
        read=model.read,
        sender_name=sender_name,
        recipient_name=recipient_name,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        conversation_id=entity.conversation_id,
        sender_id=entity.sender_id,
        recipient_id=entity.recipient_id,
        content=entity.content,
        sent_at=entity.sent_at,
        read=entity.read,
    )
