from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from office_chat.domain.entities.contact import ContactEntry
from office_chat.domain.entities.conversation import Conversation
from office_chat.domain.entities.message import Message
from office_chat.domain.value_objects.conversation_key import ConversationKey
from office_chat.infrastructure.db.mappers import conversation as mapper
from office_chat.infrastructure.db.models.conversation import ConversationModel
from office_chat.infrastructure.db.models.message import MessageModel
from office_chat.infrastructure.db.models.user import UserModel


class ConversationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_key(self, key: ConversationKey) -> Conversation | None:
        stmt = select(ConversationModel).where(
            ConversationModel.user_low_id == key.low,
            ConversationModel.user_high_id == key.high,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_contacts(self, user_id: UUID) -> list[ContactEntry]:
        counterpart_id = case(
            (ConversationModel.user_low_id == user_id, ConversationModel.user_high_id),
            else_=ConversationModel.user_low_id,
        )
        unread = (
            select(
                MessageModel.conversation_id,
                func.count().label("unread_count"),
            )
            .where(
                MessageModel.recipient_id == user_id,
                MessageModel.read.is_(False),
            )
            .group_by(MessageModel.conversation_id)
            .subquery()
        )
        stmt = (
            select(
                counterpart_id.label("counterpart_id"),
                UserModel.name,
                UserModel.email,
                ConversationModel.last_message_preview,
                ConversationModel.last_message_at,
                func.coalesce(unread.c.unread_count, 0).label("unread_count"),
            )
            .select_from(ConversationModel)
            .outerjoin(UserModel, UserModel.id == counterpart_id)
            .outerjoin(unread, unread.c.conversation_id == ConversationModel.id)
            .where(
                or_(
                    ConversationModel.user_low_id == user_id,
                    ConversationModel.user_high_id == user_id,
                ),
                ConversationModel.last_message_at.is_not(None),
            )
            .order_by(ConversationModel.last_message_at.desc(), ConversationModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            ContactEntry(
                counterpart_id=row.counterpart_id,
                counterpart_name=row.name,
                counterpart_email=row.email,
                last_message_preview=row.last_message_preview,
                last_message_at=row.last_message_at,
                unread_count=row.unread_count,
            )
            for row in result.all()
        ]


class ConversationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_or_create(self, key: ConversationKey, now: datetime) -> Conversation:
        stmt = (
            pg_insert(ConversationModel)
            .values(user_low_id=key.low, user_high_id=key.high, created_at=now)
            .on_conflict_do_nothing(constraint="uq_conversation_pair")
            .returning(ConversationModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            # Already exists. FOR UPDATE waits for a concurrent sender to
            # commit and then reads its last_message_at.
            existing = await self._session.execute(
                select(ConversationModel)
                .where(
                    ConversationModel.user_low_id == key.low,
                    ConversationModel.user_high_id == key.high,
                )
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            model = existing.scalar_one()
        return mapper.model_to_entity(model)

    async def touch_last_message(self, conversation_id: UUID, message: Message) -> None:
        stmt = (
            update(ConversationModel)
            .where(
                ConversationModel.id == conversation_id,
                ConversationModel.last_message_at.is_(None)
                | (ConversationModel.last_message_at <= message.sent_at),
            )
            .values(
                last_message_id=message.id,
                last_message_preview=message.content,
                last_message_at=message.sent_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
