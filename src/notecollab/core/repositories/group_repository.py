"""Group membership lookups."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.group import Group, GroupMember


class GroupRepository:
    """Answers "which groups is this user in?" for permission checks."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, group_id: UUID) -> Optional[Group]:
        stmt = select(Group).where(Group.id == group_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_group_ids(self, user_id: UUID) -> List[UUID]:
        """IDs of every group the user is a member of."""
        stmt = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars())
