"""
Service interfaces for the NoteCollab application.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..models.notification import NotificationType
from ..models.share import SharePermission, ShareTarget
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import (
    CommentResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    VersionResponse,
)
from ..schemas.notifications import NotificationResponse
from ..schemas.sharing import ShareResponse


class INoteService(ABC):
    """Note documents, their tags, version history and comments."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""

    @abstractmethod
    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get a note the user can at least view."""

    @abstractmethod
    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Snapshot, then overwrite."""

    @abstractmethod
    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        """Soft delete."""

    @abstractmethod
    async def list_user_notes(
        self,
        user_id: UUID,
        tag_id: Optional[UUID] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[NoteResponse]:
        """List the user's own live notes."""

    @abstractmethod
    async def add_tag(self, note_id: UUID, user_id: UUID, tag_id: UUID) -> NoteResponse:
        """Attach a tag."""

    @abstractmethod
    async def remove_tag(self, note_id: UUID, user_id: UUID, tag_id: UUID) -> NoteResponse:
        """Detach a tag."""

    @abstractmethod
    async def list_versions(self, note_id: UUID, user_id: UUID) -> List[VersionResponse]:
        """Version history, newest first."""

    @abstractmethod
    async def restore_version(self, note_id: UUID, user_id: UUID, version_id: UUID) -> NoteResponse:
        """Copy an old snapshot back onto the note."""

    @abstractmethod
    async def add_comment(self, note_id: UUID, user_id: UUID, content: str) -> CommentResponse:
        """Comment on a note."""

    @abstractmethod
    async def list_comments(self, note_id: UUID, user_id: UUID) -> List[CommentResponse]:
        """Comments, newest first."""


class ISharingService(ABC):
    """Grants on notes."""

    @abstractmethod
    async def share_with_user(
        self, note_id: UUID, requester_id: UUID, target_user_id: UUID, permission: SharePermission
    ) -> ShareResponse:
        """Create or update a user grant."""

    @abstractmethod
    async def share_with_group(
        self, note_id: UUID, requester_id: UUID, target_group_id: UUID, permission: SharePermission
    ) -> ShareResponse:
        """Create or update a group grant."""

    @abstractmethod
    async def revoke_share(
        self,
        note_id: UUID,
        requester_id: UUID,
        user_id: Optional[UUID] = None,
        group_id: Optional[UUID] = None,
    ) -> bool:
        """Remove a grant if present."""

    @abstractmethod
    async def update_permission(
        self, note_id: UUID, requester_id: UUID, target: ShareTarget, permission: SharePermission
    ) -> ShareResponse:
        """Change an existing grant's level."""

    @abstractmethod
    async def list_shares(self, note_id: UUID, requester_id: UUID) -> List[ShareResponse]:
        """All grants on a note."""

    @abstractmethod
    async def list_shared_with_me(self, user_id: UUID) -> List[NoteResponse]:
        """Notes other people shared with the user."""


class INotificationService(ABC):
    """Persistent notifications with live delivery."""

    @abstractmethod
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
        """Store and push a notification."""

    @abstractmethod
    async def list(self, recipient_id: UUID, limit: Optional[int] = None) -> List[NotificationResponse]:
        """Newest notifications first."""

    @abstractmethod
    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> NotificationResponse:
        """Mark one notification read."""

    @abstractmethod
    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark everything read."""

    @abstractmethod
    async def delete(self, notification_id: UUID, recipient_id: UUID) -> None:
        """Delete one notification."""

    @abstractmethod
    async def unread_count(self, recipient_id: UUID) -> int:
        """Count UNREAD notifications."""


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self, realtime_connections: int = 0) -> HealthCheckResponse:
        """Get app health status."""

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
