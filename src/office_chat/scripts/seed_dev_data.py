"""Seed development data: three staff members and a short conversation."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.dialects.postgresql import insert as pg_insert

from office_chat.application.dto.message import SendMessageDTO
from office_chat.application.dto.principal import Principal
from office_chat.application.ports.cache import NullContactCache
from office_chat.infrastructure.db.models.user import UserModel
from office_chat.infrastructure.db.session import AsyncSessionLocal
from office_chat.infrastructure.db.uow import SqlAlchemyUoW
from office_chat.services import message_service

logger = logging.getLogger(__name__)

USERS = [
    (uuid.UUID("00000000-0000-0000-0000-000000000001"), "Ana Souza", "ana@office.local"),
    (uuid.UUID("00000000-0000-0000-0000-000000000002"), "Bruno Lima", "bruno@office.local"),
    (uuid.UUID("00000000-0000-0000-0000-000000000003"), "Carla Dias", "carla@office.local"),
]


class _StepClock:
    """Hands out increasing timestamps so seeded messages keep their order."""

    def __init__(self, start: datetime) -> None:
        self._current = start

    def now(self) -> datetime:
        self._current += timedelta(seconds=1)
        return self._current


async def seed() -> None:
    ana, bruno, carla = (u[0] for u in USERS)
    clock = _StepClock(datetime.now(timezone.utc) - timedelta(minutes=5))
    cache = NullContactCache()

    async with AsyncSessionLocal() as session:
        await session.execute(
            pg_insert(UserModel)
            .values([{"id": i, "name": n, "email": e} for i, n, e in USERS])
            .on_conflict_do_nothing()
        )
        await session.commit()

        uow = SqlAlchemyUoW(session)
        messages_data = [
            (ana, bruno, "Bom dia! O processo 0012 já foi protocolado?"),
            (bruno, ana, "Ainda não, falta a procuração assinada."),
            (ana, bruno, "Vou pedir ao cliente hoje."),
            (carla, ana, "Ana, a audiência de quinta foi remarcada."),
        ]
        for sender_id, recipient_id, content in messages_data:
            await message_service.send_message(
                Principal(user_id=sender_id),
                SendMessageDTO(recipient_id=recipient_id, content=content),
                uow,
                cache,
                clock=clock,
            )

    logger.info("Seeded %d users and %d messages", len(USERS), len(messages_data))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
