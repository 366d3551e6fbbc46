"""Room bookkeeping and fan-out."""

import pytest

from notecollab.realtime import Connection, SessionManager, note_room, user_room


@pytest.fixture
def manager():
    return SessionManager()


def test_room_names():
    assert note_room("n1") == "note-n1"
    assert user_room("u1") == "user-u1"


def test_join_and_leave(manager, fake_websocket):
    conn = Connection(fake_websocket())
    manager.register(conn)
    manager.join("note-1", conn)

    assert manager.has_members("note-1")
    assert manager.members("note-1") == [conn]
    assert conn.rooms == {"note-1"}

    assert manager.leave("note-1", conn) is True
    assert not manager.has_members("note-1")
    assert manager.rooms() == []
    assert conn.rooms == set()


def test_leave_room_never_joined(manager, fake_websocket):
    conn = Connection(fake_websocket())
    assert manager.leave("note-1", conn) is False


def test_joining_twice_keeps_one_membership(manager, fake_websocket):
    conn = Connection(fake_websocket())
    manager.join("note-1", conn)
    manager.join("note-1", conn)
    assert len(manager.members("note-1")) == 1


def test_leave_all_forgets_connection(manager, fake_websocket):
    conn = Connection(fake_websocket())
    manager.register(conn)
    manager.join("note-1", conn)
    manager.join("user-a", conn)
    assert manager.connection_count == 1

    left = manager.leave_all(conn)

    assert sorted(left) == ["note-1", "user-a"]
    assert manager.connection_count == 0
    assert manager.rooms() == []


async def test_broadcast_excludes_sender(manager, fake_websocket):
    sender_ws, other_ws = fake_websocket(), fake_websocket()
    sender, other = Connection(sender_ws), Connection(other_ws)
    manager.join("note-1", sender)
    manager.join("note-1", other)

    delivered = await manager.broadcast("note-1", "note-updated", {"x": 1}, exclude=sender)

    assert delivered == 1
    assert other_ws.sent == [{"event": "note-updated", "data": {"x": 1}}]
    assert sender_ws.sent == []


async def test_broadcast_skips_failed_member(manager, fake_websocket):
    broken, healthy_ws = Connection(fake_websocket(fail=True)), fake_websocket()
    manager.join("note-1", broken)
    manager.join("note-1", Connection(healthy_ws))

    delivered = await manager.broadcast("note-1", "ping", {})

    assert delivered == 1
    assert healthy_ws.events() == ["ping"]


async def test_broadcast_to_empty_room(manager):
    assert await manager.broadcast("note-404", "ping", {}) == 0


async def test_broadcast_many(manager, fake_websocket):
    ws = fake_websocket()
    conn = Connection(ws)
    manager.join("note-1", conn)
    manager.join("note-2", conn)

    assert await manager.broadcast_many(["note-1", "note-2", "note-3"], "ping", {}) == 2
    assert ws.events() == ["ping", "ping"]
