"""Comment repository for database operations."""

from typing import List
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.comment import Comment


class CommentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_comment(self, comment_data: dict) -> Comment:
        comment = Comment(**comment_data)
        self.session.add(comment)
        await self.session.commit()
        await self.session.refresh(comment)
        return comment

    async def list_for_note(self, note_id: UUID) -> List[Comment]:
        """Comments on a note, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.note_id == note_id)
            .order_by(desc(Comment.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())
