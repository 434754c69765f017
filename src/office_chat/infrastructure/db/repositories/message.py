from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from office_chat.domain.entities.message import Message
from office_chat.infrastructure.db.mappers import message as mapper
from office_chat.infrastructure.db.models.message import MessageModel
from office_chat.infrastructure.db.models.user import UserModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> Message | None:
        model = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(model) if model else None

    async def list_messages(
        self,
        conversation_id: UUID,
        *,
        after: Message | None = None,
    ) -> list[Message]:
        sender = aliased(UserModel)
        recipient = aliased(UserModel)
        stmt = (
            select(MessageModel, sender.name, recipient.name)
            .outerjoin(sender, sender.id == MessageModel.sender_id)
            .outerjoin(recipient, recipient.id == MessageModel.recipient_id)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
        )
        if after is not None:
            stmt = stmt.where(
                (MessageModel.sent_at > after.sent_at)
                | ((MessageModel.sent_at == after.sent_at) & (MessageModel.id > after.id))
            )
        result = await self._session.execute(stmt)
        return [
            mapper.model_to_entity(model, sender_name, recipient_name)
            for model, sender_name, recipient_name in result.all()
        ]

    async def count_unread(self, sender_id: UUID, recipient_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(MessageModel)
            .where(
                MessageModel.sender_id == sender_id,
                MessageModel.recipient_id == recipient_id,
                MessageModel.read.is_(False),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: Message) -> None:
        self._session.add(mapper.entity_to_model(message))
        await self._session.flush()

    async def mark_read(
        self,
        sender_id: UUID,
        recipient_id: UUID,
        *,
        up_to: Message | None = None,
    ) -> int:
        stmt = (
            update(MessageModel)
            .where(
                MessageModel.sender_id == sender_id,
                MessageModel.recipient_id == recipient_id,
                MessageModel.read.is_(False),
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        if up_to is not None:
            stmt = stmt.where(
                (MessageModel.sent_at < up_to.sent_at)
                | ((MessageModel.sent_at == up_to.sent_at) & (MessageModel.id <= up_to.id))
            )
        result = await self._session.execute(stmt)
        return result.rowcount or 0
