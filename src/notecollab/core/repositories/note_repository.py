"""Note repository for database operations."""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.share import Share
from ..models.tag import Tag


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID with shares and tags (deleted notes included)."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, note: Note) -> Note:
        """Commit pending changes on a note and reload it."""
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def list_user_notes(
        self,
        owner_id: UUID,
        tag_id: Optional[UUID] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Note]:
        """List a user's live notes, newest update first."""
        stmt = select(Note).where(and_(Note.owner_id == owner_id, Note.is_deleted.is_(False)))

        if tag_id is not None:
            stmt = stmt.where(Note.tags.any(Tag.id == tag_id))

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(or_(Note.title.ilike(pattern), Note.content.ilike(pattern)))

        # both bounds inclusive
        if start_date is not None:
            stmt = stmt.where(Note.created_at >= start_date)
        if end_date is not None:
            stmt = stmt.where(Note.created_at <= end_date)

        stmt = stmt.order_by(desc(Note.updated_at))
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def list_shared_with_user(
        self, user_id: UUID, group_ids: Iterable[UUID] = ()
    ) -> List[Note]:
        """Live notes granted to the user directly or through one of their groups."""
        group_ids = list(group_ids)
        target_condition = Share.target_user_id == user_id
        if group_ids:
            target_condition = or_(target_condition, Share.target_group_id.in_(group_ids))

        stmt = (
            select(Note)
            .where(
                and_(
                    Note.is_deleted.is_(False),
                    Note.owner_id != user_id,
                    Note.shares.any(target_condition),
                )
            )
            .order_by(desc(Note.updated_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())
