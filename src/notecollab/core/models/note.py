# Note model for user content
import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, event
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import attributes as orm_attributes
from sqlalchemy.orm import mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .share import Share
    from .tag import Tag


class Note(BaseModel):
    """Rich text note with embedded share grants."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    is_shared: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    current_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    shares: Mapped[List["Share"]] = relationship(
        "Share",
        back_populates="note",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Share.created_at",
        doc="Grants giving other users or groups access to this note",
    )

    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        secondary="note_tags",
        lazy="selectin",
        doc="Tags attached to this note",
    )

    __table_args__ = (
        Index("idx_notes_owner_id", "owner_id"),
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_owner_created", "owner_id", "created_at"),
        Index("idx_notes_owner_deleted", "owner_id", "is_deleted"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        CheckConstraint("current_version >= 1", name="ck_notes_version_positive"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    @property
    def tag_ids(self) -> List[uuid.UUID]:
        return [tag.id for tag in self.tags]

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.owner_id == user_id

    def sync_shared_flag(self) -> None:
        """Keep is_shared in step with the grant list."""
        self.is_shared = len(self.shares) > 0


# Ensure relationship collections are initialized to avoid implicit lazy loads
@event.listens_for(Note, "init", propagate=True)
def _init_note_collections(target, args, kwargs):
    if "tags" not in kwargs:
        orm_attributes.set_committed_value(target, "tags", [])
    if "shares" not in kwargs:
        orm_attributes.set_committed_value(target, "shares", [])
