"""Dispatches inbound socket frames to room operations."""

from typing import Awaitable, Callable, Dict, List, Tuple, Type

from pydantic import ValidationError

from ..core.logging import get_logger
from .events import (
    CommentAdded,
    CursorMove,
    CursorPosition,
    Frame,
    JoinNote,
    JoinUserRoom,
    LeaveNote,
    NewComment,
    NoteEdit,
    NoteUpdated,
    NotificationReceived,
    SendNotification,
    UserPresence,
    WireModel,
)
from .session_manager import NOTE_ROOM_PREFIX, Connection, SessionManager, note_room, user_room

logger = get_logger("realtime.gateway")

Handler = Callable[[Connection, WireModel], Awaitable[None]]


class CollaborationGateway:
    """Relays co-editing events between members of a note room.

    The gateway trusts the ids in each frame; it performs no permission
    checks and persists nothing.
    """

    def __init__(self, manager: SessionManager):
        self.manager = manager
        self._handlers: Dict[str, Tuple[Type[WireModel], Handler]] = {
            "join-note": (JoinNote, self._join_note),
            "leave-note": (LeaveNote, self._leave_note),
            "note-update": (NoteEdit, self._note_update),
            "cursor-move": (CursorMove, self._cursor_move),
            "comment-added": (CommentAdded, self._comment_added),
            "join-user-room": (JoinUserRoom, self._join_user_room),
            "send-notification": (SendNotification, self._send_notification),
        }

    def connect(self, connection: Connection) -> None:
        self.manager.register(connection)

    async def handle_text(self, connection: Connection, raw: str) -> None:
        """Handle one text frame. Bad frames are logged and dropped."""
        try:
            frame = Frame.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed frame from {connection.id}: {e.errors()[0]['msg']}")
            return

        entry = self._handlers.get(frame.event)
        if entry is None:
            logger.warning(f"Ignoring unknown event {frame.event!r} from {connection.id}")
            return

        model, handler = entry
        try:
            payload = model.model_validate(frame.data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {frame.event} payload from {connection.id}: {e}")
            return

        await handler(connection, payload)

    async def disconnect(self, connection: Connection) -> None:
        """Leave every room; each note room hears ``user-left`` for the id it was told."""
        rooms = self.manager.leave_all(connection)
        if connection.user_id is None:
            return

        departures: Dict[str, List[str]] = {}
        for room in rooms:
            if room.startswith(NOTE_ROOM_PREFIX):
                user_id = connection.note_presence.get(room, connection.user_id)
                departures.setdefault(user_id, []).append(room)
        for user_id, note_rooms in departures.items():
            await self.manager.broadcast_many(
                note_rooms, "user-left", UserPresence(user_id=user_id).payload()
            )
        connection.note_presence.clear()
        logger.info(f"Connection {connection.id} for user {connection.user_id} closed")

    async def _join_note(self, connection: Connection, payload: JoinNote) -> None:
        room = note_room(payload.note_id)
        if connection.user_id is None:
            connection.user_id = payload.user_id
        connection.note_presence[room] = payload.user_id
        self.manager.join(room, connection)
        logger.info(f"User {payload.user_id} joined note {payload.note_id}")
        await self.manager.broadcast(
            room, "user-joined", UserPresence(user_id=payload.user_id).payload(), exclude=connection
        )

    async def _leave_note(self, connection: Connection, payload: LeaveNote) -> None:
        room = note_room(payload.note_id)
        self.manager.leave(room, connection)
        connection.note_presence.pop(room, None)
        logger.info(f"User {payload.user_id} left note {payload.note_id}")
        await self.manager.broadcast(room, "user-left", UserPresence(user_id=payload.user_id).payload())

    async def _note_update(self, connection: Connection, payload: NoteEdit) -> None:
        event = NoteUpdated(user_id=payload.user_id, title=payload.title, content=payload.content)
        await self.manager.broadcast(
            note_room(payload.note_id), "note-updated", event.payload(), exclude=connection
        )
        logger.debug(f"Note {payload.note_id} updated by {payload.user_id}")

    async def _cursor_move(self, connection: Connection, payload: CursorMove) -> None:
        event = CursorPosition(
            user_id=payload.user_id, position=payload.position, selection=payload.selection
        )
        await self.manager.broadcast(
            note_room(payload.note_id), "cursor-position", event.payload(), exclude=connection
        )

    async def _comment_added(self, connection: Connection, payload: CommentAdded) -> None:
        event = NewComment(
            user_id=payload.user_id, comment=payload.comment, comment_id=payload.comment_id
        )
        await self.manager.broadcast(
            note_room(payload.note_id), "new-comment", event.payload(), exclude=connection
        )

    async def _join_user_room(self, connection: Connection, payload: JoinUserRoom) -> None:
        if connection.user_id is None:
            connection.user_id = payload.user_id
        self.manager.join(user_room(payload.user_id), connection)
        logger.info(f"User {payload.user_id} joined notification room")

    async def _send_notification(self, connection: Connection, payload: SendNotification) -> None:
        event = NotificationReceived(
            type=payload.notification_type, message=payload.message, note_id=payload.note_id
        )
        sent = await self.manager.broadcast(
            user_room(payload.recipient_id), "notification-received", event.payload()
        )
        logger.info(f"Notification relayed to {payload.recipient_id} ({sent} connections)")
