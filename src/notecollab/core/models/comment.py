# Comments on notes
import uuid

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Comment(BaseModel):
    """Comment left on a note by its owner or a collaborator."""

    __tablename__ = "comments"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (Index("idx_comments_note_created", "note_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Comment(note_id={self.note_id}, author_id={self.author_id})>"
