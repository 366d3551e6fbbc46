"""Two real socket clients talking through the collaboration endpoint."""

import time

import pytest
from fastapi.testclient import TestClient

from notecollab.main import create_app


def send(ws, event, **data):
    ws.send_json({"event": event, "data": data})


def wait_until(predicate, timeout=2.0):
    """Frames are handled on the server loop; poll until one has landed."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.01)


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def manager(client):
    return client.app.state.session_manager


def test_edit_reaches_peer_but_not_sender(client, manager):
    with client.websocket_connect("/api/ws") as alice, client.websocket_connect("/api/ws") as bob:
        send(alice, "join-note", noteId="n1", userId="alice")
        wait_until(lambda: manager.has_members("note-n1"))
        send(bob, "join-note", noteId="n1", userId="bob")

        joined = alice.receive_json()
        assert joined["event"] == "user-joined"
        assert joined["data"]["userId"] == "bob"

        send(alice, "note-update", noteId="n1", userId="alice", content="draft 2")
        update = bob.receive_json()
        assert update["event"] == "note-updated"
        assert update["data"]["content"] == "draft 2"

        # the next frame alice sees is bob's cursor, so no echo was queued before it
        send(bob, "cursor-move", noteId="n1", userId="bob", position=7)
        cursor = alice.receive_json()
        assert cursor["event"] == "cursor-position"
        assert cursor["data"]["position"] == 7

        assert manager.connection_count == 2


def test_closing_a_socket_announces_departure(client, manager):
    with client.websocket_connect("/api/ws") as alice:
        send(alice, "join-note", noteId="n1", userId="alice")
        wait_until(lambda: manager.has_members("note-n1"))
        with client.websocket_connect("/api/ws") as bob:
            send(bob, "join-note", noteId="n1", userId="bob")
            assert alice.receive_json()["event"] == "user-joined"

        left = alice.receive_json()
        assert left["event"] == "user-left"
        assert left["data"]["userId"] == "bob"


def test_garbage_frames_keep_the_socket_open(client, manager):
    with client.websocket_connect("/api/ws") as alice, client.websocket_connect("/api/ws") as bob:
        send(alice, "join-user-room", userId="alice")
        wait_until(lambda: manager.has_members("user-alice"))

        bob.send_text("{not json")
        send(bob, "no-such-event")
        send(bob, "send-notification", recipientId="alice", notificationType="COMMENT_ADDED", message="ping")

        frame = alice.receive_json()
        assert frame["event"] == "notification-received"
        assert frame["data"]["message"] == "ping"


def test_binary_frame_is_dropped_without_closing(client, manager):
    with client.websocket_connect("/api/ws") as alice, client.websocket_connect("/api/ws") as bob:
        send(alice, "join-note", noteId="n1", userId="alice")
        wait_until(lambda: manager.has_members("note-n1"))
        send(bob, "join-note", noteId="n1", userId="bob")
        assert alice.receive_json()["event"] == "user-joined"

        bob.send_bytes(b'{"event": "note-update"}')
        send(bob, "note-update", noteId="n1", userId="bob", content="still here")

        update = alice.receive_json()
        assert update["event"] == "note-updated"
        assert update["data"]["content"] == "still here"
        assert len(manager.members("note-n1")) == 2
