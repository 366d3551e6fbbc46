"""Note service implementation."""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..logging import get_logger
from ..models.note import Note
from ..permissions import AccessLevel, effective_permission
from ..repositories.comment_repository import CommentRepository
from ..repositories.group_repository import GroupRepository
from ..repositories.note_repository import NoteRepository
from ..repositories.tag_repository import TagRepository
from ..repositories.version_repository import VersionRepository
from ..schemas.notes import (
    CommentResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    TagSummary,
    VersionResponse,
)
from ..schemas.sharing import ShareResponse
from .interfaces import INoteService

logger = get_logger("services.notes")


def note_to_response(note: Note, level: AccessLevel) -> NoteResponse:
    """Build the API view of a note for a caller holding ``level``."""
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        owner_id=note.owner_id,
        tags=[TagSummary.model_validate(tag) for tag in note.tags],
        is_shared=note.is_shared,
        shares=(
            [ShareResponse.from_share(share) for share in note.shares]
            if level == AccessLevel.OWNER
            else []
        ),
        current_version=note.current_version,
        is_deleted=note.is_deleted,
        access_level=level.name,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class NoteService(INoteService):
    """Note documents plus their version history, tags and comments.

    Every edit first snapshots the note as it stood, then overwrites it and
    bumps ``current_version``; the snapshot and the edit commit together.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.group_repo = GroupRepository(session)
        self.version_repo = VersionRepository(session)
        self.tag_repo = TagRepository(session)
        self.comment_repo = CommentRepository(session)

    async def access_level(self, note: Note, user_id: UUID) -> AccessLevel:
        """Effective access, loading group memberships only when needed."""
        if note.is_owned_by(user_id):
            return AccessLevel.OWNER
        if not note.shares:
            return AccessLevel.NONE
        group_ids = await self.group_repo.get_user_group_ids(user_id)
        return effective_permission(note, user_id, group_ids)

    async def authorize(
        self,
        note_id: UUID,
        user_id: UUID,
        required: AccessLevel,
        allow_deleted: bool = False,
    ) -> Tuple[Note, AccessLevel]:
        """Load a note and check the caller holds at least ``required``.

        Deleted notes only exist for their owner, and only where
        ``allow_deleted`` is set.
        """
        note = await self.note_repo.get_by_id(note_id)
        if note is None:
            raise NotFoundError("Note not found")

        level = await self.access_level(note, user_id)
        if note.is_deleted and not (allow_deleted and level == AccessLevel.OWNER):
            raise NotFoundError("Note not found")
        if level < required:
            if required == AccessLevel.OWNER:
                raise ForbiddenError("Only the note owner can do this")
            raise ForbiddenError("You do not have permission to access this note")
        return note, level

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        note = await self.note_repo.create_note(
            {
                "title": self._clean_title(request.title),
                "content": request.content or "",
                "owner_id": user_id,
                "current_version": 1,
            }
        )
        logger.info(f"Note {note.id} created by {user_id}")
        return note_to_response(note, AccessLevel.OWNER)

    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        note, level = await self.authorize(note_id, user_id, AccessLevel.VIEW, allow_deleted=True)
        return note_to_response(note, level)

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        note, level = await self.authorize(note_id, user_id, AccessLevel.EDIT)

        if request.expected_version is not None and request.expected_version != note.current_version:
            raise ConflictError(
                f"Note is at version {note.current_version}, not {request.expected_version}"
            )

        title = note.title if request.title is None else self._clean_title(request.title)
        content = note.content if request.content is None else request.content

        self.version_repo.add_snapshot(note, user_id, request.change_reason)
        note.title = title
        note.content = content
        note.current_version += 1
        note = await self.note_repo.save(note)

        logger.info(f"Note {note.id} updated to version {note.current_version} by {user_id}")
        return note_to_response(note, level)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        note, _ = await self.authorize(note_id, user_id, AccessLevel.OWNER)
        note.is_deleted = True
        await self.note_repo.save(note)
        logger.info(f"Note {note.id} soft-deleted by {user_id}")

    async def list_user_notes(
        self,
        user_id: UUID,
        tag_id: Optional[UUID] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[NoteResponse]:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        notes = await self.note_repo.list_user_notes(
            user_id, tag_id=tag_id, search=search, start_date=start_date, end_date=end_date
        )
        return [note_to_response(note, AccessLevel.OWNER) for note in notes]

    # Tags

    async def add_tag(self, note_id: UUID, user_id: UUID, tag_id: UUID) -> NoteResponse:
        note, level = await self.authorize(note_id, user_id, AccessLevel.OWNER)
        tag = await self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise NotFoundError("Tag not found")

        if tag.id not in note.tag_ids:
            note.tags.append(tag)
            note = await self.note_repo.save(note)
        return note_to_response(note, level)

    async def remove_tag(self, note_id: UUID, user_id: UUID, tag_id: UUID) -> NoteResponse:
        note, level = await self.authorize(note_id, user_id, AccessLevel.OWNER)
        tag = await self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise NotFoundError("Tag not found")

        if tag.id in note.tag_ids:
            note.tags.remove(tag)
            note = await self.note_repo.save(note)
        return note_to_response(note, level)

    # Versions

    async def list_versions(self, note_id: UUID, user_id: UUID) -> List[VersionResponse]:
        note, _ = await self.authorize(note_id, user_id, AccessLevel.OWNER, allow_deleted=True)
        versions = await self.version_repo.list_for_note(note.id)
        return [VersionResponse.model_validate(v) for v in versions]

    async def restore_version(self, note_id: UUID, user_id: UUID, version_id: UUID) -> NoteResponse:
        note, level = await self.authorize(note_id, user_id, AccessLevel.OWNER)

        version = await self.version_repo.get_by_id(version_id)
        if version is None or version.note_id != note.id:
            raise NotFoundError("Version not found")

        self.version_repo.add_snapshot(
            note, user_id, f"Restored from version {version.version_number}"
        )
        note.title = version.title
        note.content = version.content
        note.current_version += 1
        note = await self.note_repo.save(note)

        logger.info(
            f"Note {note.id} restored from version {version.version_number} "
            f"to version {note.current_version} by {user_id}"
        )
        return note_to_response(note, level)

    # Comments

    async def add_comment(self, note_id: UUID, user_id: UUID, content: str) -> CommentResponse:
        note, _ = await self.authorize(note_id, user_id, AccessLevel.COMMENT)
        if not content or not content.strip():
            raise ValidationError("Comment cannot be empty")

        comment = await self.comment_repo.create_comment(
            {"note_id": note.id, "author_id": user_id, "content": content.strip()}
        )
        return CommentResponse.model_validate(comment)

    async def list_comments(self, note_id: UUID, user_id: UUID) -> List[CommentResponse]:
        note, _ = await self.authorize(note_id, user_id, AccessLevel.VIEW)
        comments = await self.comment_repo.list_for_note(note.id)
        return [CommentResponse.model_validate(c) for c in comments]

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Title is required")
        if len(cleaned) > 200:
            raise ValidationError("Title must be at most 200 characters")
        return cleaned
