"""Import all models so Base.metadata sees every table."""
from office_chat.infrastructure.db.models.conversation import ConversationModel
from office_chat.infrastructure.db.models.message import MessageModel
from office_chat.infrastructure.db.models.user import UserModel

__all__ = [
    "ConversationModel",
    "MessageModel",
    "UserModel",
]
