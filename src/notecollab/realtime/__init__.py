"""
Realtime collaboration over WebSockets.

Rooms are named ``note-<id>`` for co-editing and ``user-<id>`` for personal
notification delivery.
"""

from .gateway import CollaborationGateway
from .session_manager import Connection, SessionManager, note_room, user_room

__all__ = [
    "CollaborationGateway",
    "Connection",
    "SessionManager",
    "note_room",
    "user_room",
]
