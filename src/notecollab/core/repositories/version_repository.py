"""Version history repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.version import NoteVersion


class VersionRepository:
    """Append-only access to note snapshots."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def add_snapshot(self, note: Note, changed_by: UUID, change_reason: Optional[str]) -> NoteVersion:
        """Stage a snapshot of the note's current state.

        Not committed here; the caller commits it together with the edit.
        """
        version = NoteVersion(
            note_id=note.id,
            version_number=note.current_version,
            title=note.title,
            content=note.content,
            changed_by_user_id=changed_by,
            change_reason=change_reason,
        )
        self.session.add(version)
        return version

    async def get_by_id(self, version_id: UUID) -> Optional[NoteVersion]:
        stmt = select(NoteVersion).where(NoteVersion.id == version_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_note(self, note_id: UUID) -> List[NoteVersion]:
        """Snapshots of a note, newest first."""
        stmt = (
            select(NoteVersion)
            .where(NoteVersion.note_id == note_id)
            .order_by(desc(NoteVersion.version_number), desc(NoteVersion.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())
