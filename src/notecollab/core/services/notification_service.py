"""Notification service implementation."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...realtime.events import NotificationReceived
from ...realtime.session_manager import SessionManager, user_room
from ..exceptions import NotFoundError, ValidationError
from ..logging import get_logger
from ..models.notification import Notification, NotificationStatus, NotificationType
from ..redis_client import RedisClient, get_redis_client
from ..repositories.notification_repository import NotificationRepository
from ..schemas.notifications import NotificationResponse
from .interfaces import INotificationService

logger = get_logger("services.notifications")


class NotificationService(INotificationService):
    """Stores notifications and pushes them to the recipient's user room.

    The database is the source of truth. Redis only caches unread counts and
    the live push is best-effort; neither can undo a stored notification.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_manager: Optional[SessionManager] = None,
        redis_client: Optional[RedisClient] = None,
    ):
        self.session = session
        self.settings = get_settings()
        self.notification_repo = NotificationRepository(session)
        self.session_manager = session_manager
        self.redis = redis_client or get_redis_client()

    async def create(
        self,
        recipient_id: UUID,
        type: NotificationType,
        actor_id: UUID,
        message: str,
        note_id: Optional[UUID] = None,
        group_id: Optional[UUID] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> NotificationResponse:
        notification = await self.notification_repo.create_notification(
            {
                "recipient_id": recipient_id,
                "actor_id": actor_id,
                "note_id": note_id,
                "group_id": group_id,
                "type": type,
                "message": message,
                "status": NotificationStatus.UNREAD,
                "data": data or {},
                "read_at": None,
            }
        )
        await self.redis.invalidate_unread_count(recipient_id)
        logger.info(f"Notification {notification.id} ({type.value}) stored for {recipient_id}")

        await self._push(notification)
        return NotificationResponse.model_validate(notification)

    async def list(self, recipient_id: UUID, limit: Optional[int] = None) -> List[NotificationResponse]:
        if limit is None:
            limit = self.settings.notifications_default_limit
        if not 1 <= limit <= self.settings.notifications_max_limit:
            raise ValidationError(
                f"limit must be between 1 and {self.settings.notifications_max_limit}"
            )
        notifications = await self.notification_repo.list_for_recipient(recipient_id, limit)
        return [NotificationResponse.model_validate(n) for n in notifications]

    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> NotificationResponse:
        notification = await self.notification_repo.get_for_recipient(notification_id, recipient_id)
        if notification is None:
            raise NotFoundError("Notification not found")

        notification.mark_read()
        notification = await self.notification_repo.save(notification)
        await self.redis.invalidate_unread_count(recipient_id)
        return NotificationResponse.model_validate(notification)

    async def mark_all_read(self, recipient_id: UUID) -> int:
        updated = await self.notification_repo.mark_all_read(recipient_id)
        await self.redis.invalidate_unread_count(recipient_id)
        logger.info(f"Marked {updated} notifications read for {recipient_id}")
        return updated

    async def delete(self, notification_id: UUID, recipient_id: UUID) -> None:
        deleted = await self.notification_repo.delete_for_recipient(notification_id, recipient_id)
        if not deleted:
            raise NotFoundError("Notification not found")
        await self.redis.invalidate_unread_count(recipient_id)

    async def unread_count(self, recipient_id: UUID) -> int:
        cached = await self.redis.get_cached_unread_count(recipient_id)
        if cached is not None:
            return cached

        # read before counting; a change committed meanwhile bumps it
        generation = await self.redis.get_unread_generation(recipient_id)
        count = await self.notification_repo.count_unread(recipient_id)
        await self.redis.cache_unread_count(recipient_id, count, generation)
        return count

    async def _push(self, notification: Notification) -> None:
        """Live delivery to the recipient's user room, if anyone is listening."""
        if self.session_manager is None:
            return
        room = user_room(notification.recipient_id)
        if not self.session_manager.has_members(room):
            return

        event = NotificationReceived(
            type=notification.type.value,
            message=notification.message,
            note_id=str(notification.note_id) if notification.note_id else None,
            timestamp=notification.created_at,
        )
        try:
            await self.session_manager.broadcast(room, "notification-received", event.payload())
        except Exception as e:
            logger.warning(f"Live delivery of notification {notification.id} failed: {e}")
