"""Notification schemas."""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.notification import NotificationStatus, NotificationType


class NotificationResponse(BaseModel):
    id: uuid.UUID
    recipient_id: uuid.UUID
    actor_id: uuid.UUID
    note_id: Optional[uuid.UUID] = None
    group_id: Optional[uuid.UUID] = None
    type: NotificationType
    message: str
    status: NotificationStatus
    data: Dict[str, Any] = Field(default_factory=dict)
    read_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCountResponse(BaseModel):
    unread_count: int = Field(description="Notifications still UNREAD")


class MarkAllReadResponse(BaseModel):
    message: str = "All notifications marked as read"
    updated: int = Field(description="How many notifications changed state")
