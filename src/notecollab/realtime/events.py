"""
Wire models for the collaboration socket.

Every frame is ``{"event": <name>, "data": {...}}``; payload keys are
camelCase on the wire and snake_case in Python.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Frame(BaseModel):
    event: str = Field(min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def payload(self) -> Dict[str, Any]:
        """Serialize for sending: camelCase keys, ISO timestamps."""
        return self.model_dump(mode="json", by_alias=True)


# Client -> server

class JoinNote(WireModel):
    note_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class LeaveNote(JoinNote):
    pass


class NoteEdit(WireModel):
    note_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    title: Optional[str] = None
    content: Optional[str] = None


class CursorMove(WireModel):
    note_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    position: Any = None
    selection: Any = None


class CommentAdded(WireModel):
    note_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    comment: Any = None
    comment_id: Optional[str] = None


class JoinUserRoom(WireModel):
    user_id: str = Field(min_length=1)


class SendNotification(WireModel):
    recipient_id: str = Field(min_length=1)
    notification_type: str
    message: str
    note_id: Optional[str] = None


# Server -> client

class UserPresence(WireModel):
    """Body of ``user-joined`` and ``user-left``."""

    user_id: str
    timestamp: datetime = Field(default_factory=_now)


class NoteUpdated(WireModel):
    user_id: str
    title: Optional[str] = None
    content: Optional[str] = None
    timestamp: datetime = Field(default_factory=_now)


class CursorPosition(WireModel):
    user_id: str
    position: Any = None
    selection: Any = None
    timestamp: datetime = Field(default_factory=_now)


class NewComment(WireModel):
    user_id: str
    comment: Any = None
    comment_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_now)


class NotificationReceived(WireModel):
    type: str
    message: str
    note_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_now)
