"""Sharing service implementation."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ForbiddenError, NotFoundError, ValidationError
from ..logging import get_logger
from ..models.note import Note
from ..models.notification import NotificationType
from ..models.share import GroupTarget, Share, SharePermission, ShareTarget, UserTarget
from ..permissions import effective_permission
from ..repositories.group_repository import GroupRepository
from ..repositories.note_repository import NoteRepository
from ..repositories.share_repository import ShareRepository
from ..repositories.user_repository import UserRepository
from ..schemas.notes import NoteResponse
from ..schemas.sharing import ShareResponse
from .interfaces import ISharingService
from .note_service import note_to_response
from .notification_service import NotificationService

logger = get_logger("services.sharing")


class SharingService(ISharingService):
    """Owner-managed grants on notes.

    Grants live in ``Note.shares``; every change recomputes ``is_shared``
    before committing so the flag never disagrees with the grant list.
    """

    def __init__(self, session: AsyncSession, notifications: Optional[NotificationService] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.share_repo = ShareRepository(session)
        self.user_repo = UserRepository(session)
        self.group_repo = GroupRepository(session)
        self.notifications = notifications or NotificationService(session)

    async def share_with_user(
        self,
        note_id: UUID,
        requester_id: UUID,
        target_user_id: UUID,
        permission: SharePermission = SharePermission.VIEW,
    ) -> ShareResponse:
        note = await self._owned_note(note_id, requester_id)
        if target_user_id == note.owner_id:
            raise ValidationError("Cannot share a note with yourself")
        if not await self.user_repo.exists(target_user_id):
            raise NotFoundError("User not found")

        share, created = self._upsert(note, UserTarget(target_user_id), permission, requester_id)
        note = await self.note_repo.save(note)
        logger.info(
            f"Note {note.id} shared with user {target_user_id} as {permission.value} "
            f"({'new' if created else 'updated'})"
        )

        if created:
            await self.notifications.create(
                recipient_id=target_user_id,
                type=NotificationType.NOTE_SHARED,
                actor_id=requester_id,
                message=f'Note "{note.title}" was shared with you',
                note_id=note.id,
                data={"permission": permission.value},
            )
        return ShareResponse.from_share(share)

    async def share_with_group(
        self,
        note_id: UUID,
        requester_id: UUID,
        target_group_id: UUID,
        permission: SharePermission = SharePermission.VIEW,
    ) -> ShareResponse:
        note = await self._owned_note(note_id, requester_id)
        if await self.group_repo.get_by_id(target_group_id) is None:
            raise NotFoundError("Group not found")

        share, created = self._upsert(note, GroupTarget(target_group_id), permission, requester_id)
        note = await self.note_repo.save(note)
        logger.info(
            f"Note {note.id} shared with group {target_group_id} as {permission.value} "
            f"({'new' if created else 'updated'})"
        )
        return ShareResponse.from_share(share)

    async def revoke_share(
        self,
        note_id: UUID,
        requester_id: UUID,
        user_id: Optional[UUID] = None,
        group_id: Optional[UUID] = None,
    ) -> bool:
        """Remove the grant for the given target. Missing grants are not an error."""
        target = self.resolve_target(user_id, group_id)
        note = await self._owned_note(note_id, requester_id)

        share = next((s for s in note.shares if s.matches(target)), None)
        if share is None:
            return False

        note.shares.remove(share)
        note.sync_shared_flag()
        await self.note_repo.save(note)
        logger.info(f"Share on note {note.id} for {target} revoked")
        return True

    async def update_permission(
        self,
        note_id: UUID,
        requester_id: UUID,
        target: ShareTarget,
        permission: SharePermission,
    ) -> ShareResponse:
        note = await self._owned_note(note_id, requester_id)
        share = await self.share_repo.get_existing_share(note.id, target)
        if share is None:
            raise NotFoundError("Share not found")

        share.permission = permission
        await self.note_repo.save(note)
        logger.info(f"Share on note {note.id} for {target} changed to {permission.value}")
        return ShareResponse.from_share(share)

    async def list_shares(self, note_id: UUID, requester_id: UUID) -> List[ShareResponse]:
        note = await self._owned_note(note_id, requester_id)
        shares = await self.share_repo.get_note_shares(note.id)
        return [ShareResponse.from_share(share) for share in shares]

    async def list_shared_with_me(self, user_id: UUID) -> List[NoteResponse]:
        group_ids = await self.group_repo.get_user_group_ids(user_id)
        notes = await self.note_repo.list_shared_with_user(user_id, group_ids)
        return [
            note_to_response(note, effective_permission(note, user_id, group_ids)) for note in notes
        ]

    @staticmethod
    def resolve_target(user_id: Optional[UUID], group_id: Optional[UUID]) -> ShareTarget:
        if user_id is not None and group_id is not None:
            raise ValidationError("Provide either user_id or group_id, not both")
        if user_id is not None:
            return UserTarget(user_id)
        if group_id is not None:
            return GroupTarget(group_id)
        raise ValidationError("user_id or group_id is required")

    async def _owned_note(self, note_id: UUID, requester_id: UUID) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if note is None or note.is_deleted:
            raise NotFoundError("Note not found")
        if not note.is_owned_by(requester_id):
            raise ForbiddenError("Only the note owner can manage sharing")
        return note

    @staticmethod
    def _upsert(
        note: Note, target: ShareTarget, permission: SharePermission, shared_by: UUID
    ) -> Tuple[Share, bool]:
        """Update the grant for ``target`` or add one. Returns (share, created)."""
        for share in note.shares:
            if share.matches(target):
                share.permission = permission
                return share, False

        share = Share.for_target(target, permission, shared_by)
        note.shares.append(share)
        note.sync_shared_flag()
        return share, True
