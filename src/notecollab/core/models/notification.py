# Persistent user notifications
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, utcnow
from .types import GUID


class NotificationType(str, Enum):
    """Kinds of notification the platform produces."""

    NOTE_SHARED = "NOTE_SHARED"
    NOTE_UPDATED = "NOTE_UPDATED"
    COMMENT_ADDED = "COMMENT_ADDED"
    GROUP_INVITE = "GROUP_INVITE"


class NotificationStatus(str, Enum):
    UNREAD = "UNREAD"
    READ = "READ"


class Notification(BaseModel):
    """Notification addressed to a single recipient."""

    __tablename__ = "notifications"

    recipient_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    actor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    note_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="SET NULL"), nullable=True
    )
    group_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("groups.id", ondelete="SET NULL"), nullable=True
    )

    type: Mapped[NotificationType] = mapped_column(
        SAEnum(NotificationType, name="notification_type", native_enum=False, length=30),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[NotificationStatus] = mapped_column(
        SAEnum(NotificationStatus, name="notification_status", native_enum=False, length=10),
        default=NotificationStatus.UNREAD,
        nullable=False,
    )
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    read_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_notifications_recipient_status", "recipient_id", "status"),
        Index("idx_notifications_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification(recipient_id={self.recipient_id}, type={self.type}, status={self.status})>"

    @property
    def is_read(self) -> bool:
        return self.status == NotificationStatus.READ

    def mark_read(self) -> None:
        """Flag as read, stamping the time."""
        self.status = NotificationStatus.READ
        self.read_at = utcnow()
