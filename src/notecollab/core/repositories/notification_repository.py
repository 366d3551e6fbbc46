"""Notification repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.notification import Notification, NotificationStatus


class NotificationRepository:
    """Repository for notification database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_notification(self, notification_data: dict) -> Notification:
        notification = Notification(**notification_data)
        self.session.add(notification)
        await self.session.commit()
        await self.session.refresh(notification)
        return notification

    async def get_for_recipient(
        self, notification_id: UUID, recipient_id: UUID
    ) -> Optional[Notification]:
        """Get a notification only if it belongs to the recipient."""
        stmt = select(Notification).where(
            and_(Notification.id == notification_id, Notification.recipient_id == recipient_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_recipient(self, recipient_id: UUID, limit: int = 50) -> List[Notification]:
        """Newest notifications first."""
        stmt = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .order_by(desc(Notification.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_unread(self, recipient_id: UUID) -> int:
        stmt = select(func.count(Notification.id)).where(
            and_(
                Notification.recipient_id == recipient_id,
                Notification.status == NotificationStatus.UNREAD,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, notification: Notification) -> Notification:
        await self.session.commit()
        await self.session.refresh(notification)
        return notification

    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Bulk-flag every unread notification as read. Returns rows touched."""
        stmt = (
            update(Notification)
            .where(
                and_(
                    Notification.recipient_id == recipient_id,
                    Notification.status == NotificationStatus.UNREAD,
                )
            )
            .values(status=NotificationStatus.READ, read_at=utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def delete_for_recipient(self, notification_id: UUID, recipient_id: UUID) -> bool:
        """Delete if owned by the recipient."""
        stmt = delete(Notification).where(
            and_(Notification.id == notification_id, Notification.recipient_id == recipient_id)
        ).execution_options(synchronize_session="evaluate")
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) > 0
