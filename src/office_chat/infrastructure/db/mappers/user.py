from __future__ import annotations

from office_chat.domain.entities.user import User
from office_chat.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(id=model.id, name=model.name, email=model.email)
