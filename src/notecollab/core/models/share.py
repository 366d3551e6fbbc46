# Note sharing with users or groups
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .note import Note


class SharePermission(str, Enum):
    """Permission levels a grant can carry, weakest first."""

    VIEW = "VIEW"
    COMMENT = "COMMENT"
    EDIT = "EDIT"


@dataclass(frozen=True)
class UserTarget:
    """Grant addressed to a single user."""

    user_id: uuid.UUID


@dataclass(frozen=True)
class GroupTarget:
    """Grant addressed to every member of a group."""

    group_id: uuid.UUID


ShareTarget = Union[UserTarget, GroupTarget]


class Share(BaseModel):
    """Share grant on a note. Exactly one of user/group is set."""

    __tablename__ = "shares"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    target_user_id: Mapped[uuid.UUID | None] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    target_group_id: Mapped[uuid.UUID | None] = mapped_column(
        GUID(), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True
    )
    permission: Mapped[SharePermission] = mapped_column(
        SAEnum(SharePermission, name="share_permission", native_enum=False, length=10),
        default=SharePermission.VIEW,
        nullable=False,
    )
    shared_by_user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    note: Mapped["Note"] = relationship("Note", back_populates="shares")

    __table_args__ = (
        CheckConstraint(
            "(target_user_id IS NULL) <> (target_group_id IS NULL)",
            name="ck_shares_single_target",
        ),
        UniqueConstraint("note_id", "target_user_id", name="uq_shares_note_user"),
        UniqueConstraint("note_id", "target_group_id", name="uq_shares_note_group"),
        Index("idx_shares_note_id", "note_id"),
        Index("idx_shares_target_user", "target_user_id"),
        Index("idx_shares_target_group", "target_group_id"),
    )

    def __repr__(self) -> str:
        return f"<Share(note_id={self.note_id}, target={self.target}, permission={self.permission})>"

    @classmethod
    def for_target(
        cls,
        target: ShareTarget,
        permission: SharePermission,
        shared_by_user_id: uuid.UUID,
    ) -> "Share":
        """Build a grant for the given target."""
        if isinstance(target, UserTarget):
            return cls(
                target_user_id=target.user_id,
                permission=permission,
                shared_by_user_id=shared_by_user_id,
            )
        return cls(
            target_group_id=target.group_id,
            permission=permission,
            shared_by_user_id=shared_by_user_id,
        )

    @property
    def target(self) -> ShareTarget:
        """The grant's target as a tagged variant."""
        if self.target_user_id is not None:
            return UserTarget(self.target_user_id)
        return GroupTarget(self.target_group_id)

    def matches(self, target: ShareTarget) -> bool:
        return self.target == target
