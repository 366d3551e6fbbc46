# Tag models for organizing notes
import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Tag(BaseModel):
    """Tag for categorizing notes. Tag CRUD lives in another service."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(7), default="#3b82f6", nullable=False)  # hex colors
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        # unique per owner
        UniqueConstraint("name", "owner_id", name="uq_tags_name_owner"),
        CheckConstraint("length(name) <= 50", name="ck_tags_name_len"),
        CheckConstraint("length(color) = 7", name="ck_tags_color_len"),
        Index("idx_tags_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}')>"


class NoteTag(BaseModel):
    """Links notes to tags."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("note_id", "tag_id", name="uq_note_tags_note_tag"),
        Index("idx_note_tags_note_id", "note_id"),
        Index("idx_note_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag_id={self.tag_id})>"
