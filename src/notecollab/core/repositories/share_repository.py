"""Share repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.share import GroupTarget, Share, ShareTarget, UserTarget


class ShareRepository:
    """Read side of the grants embedded in notes.

    Grants are added and removed through ``Note.shares`` so that the note's
    ``is_shared`` flag is updated in the same transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_note_shares(self, note_id: UUID) -> List[Share]:
        """All grants on a note, oldest first."""
        stmt = select(Share).where(Share.note_id == note_id).order_by(Share.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def get_existing_share(self, note_id: UUID, target: ShareTarget) -> Optional[Share]:
        """Get the grant for a note and target, if any."""
        if isinstance(target, UserTarget):
            condition = Share.target_user_id == target.user_id
        elif isinstance(target, GroupTarget):
            condition = Share.target_group_id == target.group_id
        else:
            raise TypeError(f"Unsupported share target: {target!r}")

        stmt = select(Share).where(and_(Share.note_id == note_id, condition))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
