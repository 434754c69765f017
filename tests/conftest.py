"""Shared test fixtures."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable
from uuid import UUID

import pytest

from office_chat.application.dto.principal import Principal
from office_chat.domain.entities.contact import ContactEntry
from office_chat.domain.entities.conversation import Conversation
from office_chat.domain.entities.message import Message
from office_chat.domain.entities.user import User
from office_chat.domain.value_objects.conversation_key import ConversationKey

ALICE_ID = UUID("11111111-1111-1111-1111-111111111111")
BOB_ID = UUID("22222222-2222-2222-2222-222222222222")
CAROL_ID = UUID("33333333-3333-3333-3333-333333333333")

STAFF = [
    User(id=ALICE_ID, name="Alice Martins", email="alice@office.local"),
    User(id=BOB_ID, name="Bob Ferreira", email="bob@office.local"),
    User(id=CAROL_ID, name="Carol Nunes", email="carol@office.local"),
]


class StepClock:
    """Returns strictly increasing timestamps, one second apart."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 9, 22, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def alice() -> Principal:
    return Principal(user_id=ALICE_ID, email="alice@office.local")


@pytest.fixture
def bob() -> Principal:
    return Principal(user_id=BOB_ID, email="bob@office.local")


@pytest.fixture
def carol() -> Principal:
    return Principal(user_id=CAROL_ID, email="carol@office.local")


@dataclass
class FakeUserReader:
    _users: dict[UUID, User] = field(default_factory=lambda: {u.id: u for u in STAFF})

    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        return {uid: self._users[uid] for uid in set(user_ids) if uid in self._users}


def _timeline(m: Message) -> tuple[datetime, UUID]:
    return m.sent_at, m.id


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def list_messages(
        self, conversation_id: UUID, *, after: Message | None = None,
    ) -> list[Message]:
        found = [m for m in self._messages if m.conversation_id == conversation_id]
        if after is not None:
            found = [m for m in found if _timeline(m) > _timeline(after)]
        return sorted(found, key=_timeline)

    async def count_unread(self, sender_id: UUID, recipient_id: UUID) -> int:
        return sum(
            1 for m in self._messages
            if m.sender_id == sender_id and m.recipient_id == recipient_id and not m.read
        )


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def add(self, message: Message) -> None:
        self._reader._messages.append(message)

    async def mark_read(
        self, sender_id: UUID, recipient_id: UUID, *, up_to: Message | None = None,
    ) -> int:
        updated = 0
        for i, m in enumerate(self._reader._messages):
            if m.sender_id != sender_id or m.recipient_id != recipient_id or m.read:
                continue
            if up_to is not None and _timeline(m) > _timeline(up_to):
                continue
            self._reader._messages[i] = dataclasses.replace(m, read=True)
            updated += 1
        return updated


@dataclass
class FakeConversationReader:
    _messages: FakeMessageReader
    _users: FakeUserReader
    _store: dict[UUID, Conversation] = field(default_factory=dict)

    async def get_by_key(self, key: ConversationKey) -> Conversation | None:
        return next((c for c in self._store.values() if c.key == key), None)

    async def list_contacts(self, user_id: UUID) -> list[ContactEntry]:
        entries = []
        for conv in self._store.values():
            if user_id not in (conv.user_low_id, conv.user_high_id) or conv.last_message_at is None:
                continue
            other = self._users._users.get(conv.key.other(user_id))
            entries.append(
                ContactEntry(
                    counterpart_id=conv.key.other(user_id),
                    counterpart_name=other.name if other else None,
                    counterpart_email=other.email if other else None,
                    last_message_preview=conv.last_message_preview,
                    last_message_at=conv.last_message_at,
                    unread_count=sum(
                        1 for m in self._messages._messages
                        if m.conversation_id == conv.id
                        and m.recipient_id == user_id
                        and not m.read
                    ),
                )
            )
        return sorted(entries, key=lambda e: e.last_message_at, reverse=True)


@dataclass
class FakeConversationWriter:
    _reader: FakeConversationReader

    async def get_or_create(self, key: ConversationKey, now: datetime) -> Conversation:
        existing = await self._reader.get_by_key(key)
        if existing is not None:
            return existing
        conversation = Conversation(
            id=uuid.uuid4(),
            user_low_id=key.low,
            user_high_id=key.high,
            last_message_id=None,
            last_message_preview=None,
            last_message_at=None,
            created_at=now,
        )
        self._reader._store[conversation.id] = conversation
        return conversation

    async def touch_last_message(self, conversation_id: UUID, message: Message) -> None:
        conv = self._reader._store[conversation_id]
        if conv.last_message_at is not None and conv.last_message_at > message.sent_at:
            return
        self._reader._store[conversation_id] = dataclasses.replace(
            conv,
            last_message_id=message.id,
            last_message_preview=message.content,
            last_message_at=message.sent_at,
        )


@dataclass
class FakeContactCache:
    _entries: dict[tuple[UUID, int], list[ContactEntry]] = field(default_factory=dict)
    _generations: dict[UUID, int] = field(default_factory=dict)
    invalidated: list[UUID] = field(default_factory=list)

    async def get(self, user_id: UUID) -> tuple[list[ContactEntry] | None, int]:
        generation = self._generations.get(user_id, 0)
        return self._entries.get((user_id, generation)), generation

    async def set(
        self, user_id: UUID, contacts: list[ContactEntry], generation: int,
    ) -> None:
        self._entries[(user_id, generation)] = contacts

    async def invalidate(self, *user_ids: UUID) -> None:
        for uid in user_ids:
            self._generations[uid] = self._generations.get(uid, 0) + 1
            self.invalidated.append(uid)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    conversations: FakeConversationReader | None = None
    conversations_w: FakeConversationWriter | None = None
    _committed: bool = False
    _commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.conversations is None:
            self.conversations = FakeConversationReader(self.messages, self.users)
        if self.conversations_w is None:
            self.conversations_w = FakeConversationWriter(self.conversations)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True
        self._commits += 1

    async def rollback(self) -> None:
        pass


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def cache() -> FakeContactCache:
    return FakeContactCache()
