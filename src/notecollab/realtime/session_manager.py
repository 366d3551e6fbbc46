"""In-process room registry for realtime connections."""

import uuid
from typing import Any, Dict, Iterable, List, Optional, Set

from ..core.logging import get_logger

logger = get_logger("realtime.sessions")

NOTE_ROOM_PREFIX = "note-"
USER_ROOM_PREFIX = "user-"


def note_room(note_id) -> str:
    return f"{NOTE_ROOM_PREFIX}{note_id}"


def user_room(user_id) -> str:
    return f"{USER_ROOM_PREFIX}{user_id}"


class Connection:
    """One open socket plus what the client has told us about itself.

    ``user_id`` is whatever the client announced in its first join frame and
    ``note_presence`` maps each joined note room to the id announced there.
    Neither is verified.
    """

    def __init__(self, websocket, connection_id: Optional[str] = None):
        self.websocket = websocket
        self.id = connection_id or uuid.uuid4().hex
        self.user_id: Optional[str] = None
        self.rooms: Set[str] = set()
        self.note_presence: Dict[str, str] = {}

    async def send(self, event: str, data: Dict[str, Any]) -> None:
        await self.websocket.send_json({"event": event, "data": data})

    def __repr__(self) -> str:
        return f"<Connection(id={self.id}, user_id={self.user_id}, rooms={len(self.rooms)})>"


class SessionManager:
    """Tracks which connections are in which rooms.

    Owned by the event loop: every method runs on it, so there is no locking.
    Broadcasts walk a snapshot of the room, so members joining or leaving
    while a send is suspended do not disturb the iteration.
    """

    def __init__(self):
        self._rooms: Dict[str, Dict[str, Connection]] = {}
        self._connections: Dict[str, Connection] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def register(self, connection: Connection) -> None:
        self._connections[connection.id] = connection

    def join(self, room: str, connection: Connection) -> None:
        self._connections.setdefault(connection.id, connection)
        self._rooms.setdefault(room, {})[connection.id] = connection
        connection.rooms.add(room)
        logger.debug(f"Connection {connection.id} joined {room}")

    def leave(self, room: str, connection: Connection) -> bool:
        """Remove a connection from a room. Returns False if it was not there."""
        members = self._rooms.get(room)
        connection.rooms.discard(room)
        if not members or connection.id not in members:
            return False
        del members[connection.id]
        if not members:
            del self._rooms[room]
        logger.debug(f"Connection {connection.id} left {room}")
        return True

    def leave_all(self, connection: Connection) -> List[str]:
        """Drop a connection from every room and forget it."""
        left = [room for room in list(connection.rooms) if self.leave(room, connection)]
        self._connections.pop(connection.id, None)
        return left

    def members(self, room: str) -> List[Connection]:
        return list(self._rooms.get(room, {}).values())

    def has_members(self, room: str) -> bool:
        return bool(self._rooms.get(room))

    def rooms(self) -> List[str]:
        return list(self._rooms)

    async def broadcast(
        self,
        room: str,
        event: str,
        data: Dict[str, Any],
        exclude: Optional[Connection] = None,
    ) -> int:
        """Send an event to everyone in ``room``. Returns how many sends succeeded.

        Delivery is at-most-once: a failed send is logged and skipped.
        """
        delivered = 0
        for member in self.members(room):
            if exclude is not None and member.id == exclude.id:
                continue
            try:
                await member.send(event, data)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping {event} for connection {member.id} in {room}: {e}")
        return delivered

    async def broadcast_many(
        self,
        rooms: Iterable[str],
        event: str,
        data: Dict[str, Any],
        exclude: Optional[Connection] = None,
    ) -> int:
        total = 0
        for room in rooms:
            total += await self.broadcast(room, event, data, exclude=exclude)
        return total
