from __future__ import annotations

from office_chat.domain.entities.conversation import Conversation
from office_chat.infrastructure.db.models.conversation import ConversationModel


def model_to_entity(model: ConversationModel) -> Conversation:
    return Conversation(
        id=model.id,
        user_low_id=model.user_low_id,
        user_high_id=model.user_high_id,
        last_message_id=model.last_message_id,
        last_message_preview=model.last_message_preview,
        last_message_at=model.last_message_at,
        created_at=model.created_at,
    )
