"""Frame dispatch in the collaboration gateway."""

import json

import pytest

from notecollab.realtime import CollaborationGateway, Connection, SessionManager


def frame(event, **data):
    return json.dumps({"event": event, "data": data})


@pytest.fixture
def gateway():
    return CollaborationGateway(SessionManager())


@pytest.fixture
def pair(gateway, fake_websocket):
    """Two connected clients, A and B."""
    a, b = Connection(fake_websocket()), Connection(fake_websocket())
    gateway.connect(a)
    gateway.connect(b)
    return a, b


async def join(gateway, connection, note_id, user_id):
    await gateway.handle_text(connection, frame("join-note", noteId=note_id, userId=user_id))


async def test_join_announces_to_others_only(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")

    assert a.websocket.events() == ["user-joined"]
    assert a.websocket.sent[0]["data"]["userId"] == "bob"
    assert b.websocket.sent == []
    assert b.user_id == "bob"


async def test_note_update_reaches_peer_once(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")
    a.websocket.sent.clear()

    await gateway.handle_text(a, frame("note-update", noteId="n1", userId="alice", content="hi"))

    assert a.websocket.sent == []
    assert b.websocket.events() == ["note-updated"]
    data = b.websocket.sent[0]["data"]
    assert data["userId"] == "alice"
    assert data["content"] == "hi"
    assert data["title"] is None
    assert "timestamp" in data


async def test_update_does_not_leak_to_other_notes(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n2", "bob")

    await gateway.handle_text(a, frame("note-update", noteId="n1", userId="alice", title="T"))

    assert b.websocket.sent == []


async def test_cursor_and_comment_relay(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")
    a.websocket.sent.clear()

    await gateway.handle_text(
        b, frame("cursor-move", noteId="n1", userId="bob", position=4, selection={"from": 1, "to": 4})
    )
    await gateway.handle_text(
        b, frame("comment-added", noteId="n1", userId="bob", comment={"text": "nice"}, commentId="c1")
    )

    assert a.websocket.events() == ["cursor-position", "new-comment"]
    cursor, comment = (f["data"] for f in a.websocket.sent)
    assert cursor["position"] == 4
    assert cursor["selection"] == {"from": 1, "to": 4}
    assert comment["commentId"] == "c1"
    assert comment["comment"] == {"text": "nice"}
    assert b.websocket.sent == []


async def test_leave_note_announces_departure(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")
    a.websocket.sent.clear()

    await gateway.handle_text(b, frame("leave-note", noteId="n1", userId="bob"))

    assert a.websocket.events() == ["user-left"]
    assert gateway.manager.members("note-n1") == [a]


async def test_disconnect_leaves_all_rooms(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")
    await gateway.handle_text(b, frame("join-user-room", userId="bob"))
    a.websocket.sent.clear()

    await gateway.disconnect(b)

    assert a.websocket.events() == ["user-left"]
    assert a.websocket.sent[0]["data"]["userId"] == "bob"
    assert gateway.manager.rooms() == ["note-n1"]
    assert gateway.manager.connection_count == 1


async def test_disconnect_announces_the_id_each_note_room_was_told(gateway, pair, fake_websocket):
    a, b = pair
    c = Connection(fake_websocket())
    gateway.connect(c)
    await join(gateway, a, "n1", "alice")
    await join(gateway, c, "n2", "carol")
    await join(gateway, b, "n1", "bob")
    await join(gateway, b, "n2", "bobby")
    await gateway.handle_text(b, frame("join-user-room", userId="robert"))
    a.websocket.sent.clear()
    c.websocket.sent.clear()

    await gateway.disconnect(b)

    assert a.websocket.events() == ["user-left"]
    assert a.websocket.sent[0]["data"]["userId"] == "bob"
    assert c.websocket.events() == ["user-left"]
    assert c.websocket.sent[0]["data"]["userId"] == "bobby"
    assert not gateway.manager.has_members("user-robert")


async def test_left_note_is_not_announced_again_on_disconnect(gateway, pair):
    a, b = pair
    await join(gateway, a, "n1", "alice")
    await join(gateway, b, "n1", "bob")
    await gateway.handle_text(b, frame("leave-note", noteId="n1", userId="bob"))
    a.websocket.sent.clear()

    await gateway.disconnect(b)

    assert a.websocket.sent == []
    assert b.note_presence == {}


async def test_disconnect_of_anonymous_connection_is_silent(gateway, pair):
    a, _ = pair
    await gateway.disconnect(a)
    assert gateway.manager.connection_count == 1


async def test_send_notification_reaches_every_recipient_socket(gateway, fake_websocket):
    phone, laptop, sender = (Connection(fake_websocket()) for _ in range(3))
    for conn in (phone, laptop):
        await gateway.handle_text(conn, frame("join-user-room", userId="bob"))

    await gateway.handle_text(
        sender,
        frame("send-notification", recipientId="bob", notificationType="NOTE_SHARED", message="hey", noteId="n1"),
    )

    for conn in (phone, laptop):
        assert conn.websocket.events() == ["notification-received"]
        data = conn.websocket.sent[0]["data"]
        assert data["type"] == "NOTE_SHARED"
        assert data["message"] == "hey"
        assert data["noteId"] == "n1"
    assert sender.websocket.sent == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"data": {}}),
        frame("explode", noteId="n1"),
        frame("note-update", userId="alice"),
        frame("join-note", noteId="", userId="alice"),
    ],
)
async def test_bad_frames_are_ignored(gateway, pair, raw):
    a, b = pair
    await join(gateway, b, "n1", "bob")

    await gateway.handle_text(a, raw)

    assert b.websocket.sent == []
    assert a.websocket.sent == []
    assert gateway.manager.members("note-n1") == [b]
