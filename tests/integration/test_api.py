"""Integration smoke tests for REST API (using mocked UoW via dependency override)."""
from __future__ import annotations

import uuid

import jwt
import pytest
from fastapi.testclient import TestClient

from office_chat.api.deps import get_contact_cache, get_uow
from office_chat.app import create_app
from office_chat.config import settings
from tests.conftest import ALICE_ID, BOB_ID, CAROL_ID, FakeContactCache, FakeUoW


def _make_token(sub: uuid.UUID = ALICE_ID, **claims) -> str:
    return jwt.encode(
        {"sub": str(sub), **claims},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def _auth(sub: uuid.UUID = ALICE_ID) -> dict[str, str]:
    return {"Authorization": f"Bearer {_make_token(sub)}"}


@pytest.fixture
def app_with_uow():
    app = create_app()
    uow = FakeUoW()
    cache = FakeContactCache()

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    app.dependency_overrides[get_contact_cache] = lambda: cache
    return app, uow


@pytest.fixture
def client(app_with_uow):
    app, _ = app_with_uow
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uow(app_with_uow):
    _, uow = app_with_uow
    return uow


def _send(client, sender, recipient, content):
    return client.post(
        "/chat/send",
        headers=_auth(sender),
        json={"recipientId": str(recipient), "content": content},
    )


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_send_message(client, uow):
    resp = _send(client, ALICE_ID, BOB_ID, "  Hello Bob  ")

    assert resp.status_code == 201
    data = resp.json()
    assert data["content"] == "Hello Bob"
    assert data["senderId"] == str(ALICE_ID)
    assert data["senderName"] == "Alice Martins"
    assert data["recipientId"] == str(BOB_ID)
    assert data["recipientName"] == "Bob Ferreira"
    assert data["read"] is False
    assert "sentAt" in data
    assert len(uow.messages._messages) == 1


@pytest.mark.parametrize(
    ("recipient", "content", "reason"),
    [
        (ALICE_ID, "hi", "self_message"),
        (BOB_ID, "   ", "empty_content"),
        (BOB_ID, "x" * 1001, "content_too_long"),
        (uuid.UUID(int=7), "hi", "unknown_recipient"),
    ],
)
def test_send_message_validation_errors(client, uow, recipient, content, reason):
    resp = _send(client, ALICE_ID, recipient, content)

    assert resp.status_code == 400
    assert resp.json()["reason"] == reason
    assert uow.messages._messages == []


def test_send_message_malformed_body(client):
    resp = client.post("/chat/send", headers=_auth(), json={"recipientId": "nope"})
    assert resp.status_code == 422


@pytest.mark.parametrize("body", [{}, {"content": None}])
def test_send_message_missing_content_is_empty_content(client, uow, body):
    resp = client.post(
        "/chat/send", headers=_auth(), json={"recipientId": str(BOB_ID), **body},
    )

    assert resp.status_code == 400
    assert resp.json()["reason"] == "empty_content"
    assert uow.messages._messages == []


def test_send_message_from_unknown_user_returns_401(client, uow):
    resp = _send(client, uuid.uuid4(), BOB_ID, "hi")

    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert uow.messages._messages == []


def test_unauthorized_returns_401(client):
    assert client.get("/chat/contacts").status_code == 401
    resp = client.get("/chat/contacts", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_conversation_history_marks_read(client):
    _send(client, ALICE_ID, BOB_ID, "Hello")
    _send(client, BOB_ID, ALICE_ID, "Hi back")
    _send(client, ALICE_ID, BOB_ID, "How are you?")

    unread = client.get(f"/chat/conversation/{ALICE_ID}/unread-count", headers=_auth(BOB_ID))
    assert unread.json() == {"count": 2}

    resp = client.get(f"/chat/conversation/{ALICE_ID}", headers=_auth(BOB_ID))
    assert resp.status_code == 200
    assert [m["content"] for m in resp.json()] == ["Hello", "Hi back", "How are you?"]

    unread = client.get(f"/chat/conversation/{ALICE_ID}/unread-count", headers=_auth(BOB_ID))
    assert unread.json() == {"count": 0}
    # the other direction is untouched
    unread = client.get(f"/chat/conversation/{BOB_ID}/unread-count", headers=_auth(ALICE_ID))
    assert unread.json() == {"count": 1}


def test_conversation_history_without_mark_read(client):
    _send(client, ALICE_ID, BOB_ID, "Hello")

    resp = client.get(
        f"/chat/conversation/{ALICE_ID}", params={"markRead": "false"}, headers=_auth(BOB_ID),
    )
    assert resp.status_code == 200
    unread = client.get(f"/chat/conversation/{ALICE_ID}/unread-count", headers=_auth(BOB_ID))
    assert unread.json() == {"count": 1}


def test_unknown_counterpart_yields_empty_history(client):
    resp = client.get(f"/chat/conversation/{uuid.uuid4()}", headers=_auth())
    assert resp.status_code == 200
    assert resp.json() == []


def test_poll_new_messages(client):
    first = _send(client, ALICE_ID, BOB_ID, "one").json()
    _send(client, ALICE_ID, BOB_ID, "two")

    resp = client.get(
        f"/chat/conversation/{ALICE_ID}/new",
        params={"since": first["id"]},
        headers=_auth(BOB_ID),
    )

    assert resp.status_code == 200
    assert [m["content"] for m in resp.json()] == ["two"]
    assert resp.headers["X-Poll-Interval"] == str(settings.POLL_INTERVAL_HINT)

    last = resp.json()[-1]["id"]
    resp = client.get(
        f"/chat/conversation/{ALICE_ID}/new", params={"since": last}, headers=_auth(BOB_ID),
    )
    assert resp.json() == []


def test_contacts(client):
    _send(client, ALICE_ID, BOB_ID, "to bob")
    _send(client, CAROL_ID, ALICE_ID, "to alice")

    resp = client.get("/chat/contacts", headers=_auth(ALICE_ID))

    assert resp.status_code == 200
    data = resp.json()
    assert [c["counterpartId"] for c in data] == [str(CAROL_ID), str(BOB_ID)]
    assert data[0]["counterpartName"] == "Carol Nunes"
    assert data[0]["lastMessagePreview"] == "to alice"
    assert data[0]["unreadCount"] == 1
    assert data[1]["unreadCount"] == 0


def test_mark_read_endpoint_is_idempotent(client):
    _send(client, ALICE_ID, BOB_ID, "one")
    _send(client, ALICE_ID, BOB_ID, "two")

    first = client.post(f"/chat/conversation/{ALICE_ID}/mark-read", headers=_auth(BOB_ID))
    second = client.post(f"/chat/conversation/{ALICE_ID}/mark-read", headers=_auth(BOB_ID))

    assert first.status_code == 200
    assert first.json() == {"updated": 2}
    assert second.status_code == 200
    assert second.json() == {"updated": 0}


def test_correlation_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"
