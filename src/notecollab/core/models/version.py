# Append-only note history
import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class NoteVersion(BaseModel):
    """Snapshot of a note's title/content taken right before an edit.

    ``version_number`` is the note's ``current_version`` at snapshot time, so
    version N holds exactly what the note contained while it was at N.
    Rows are never updated or deleted.
    """

    __tablename__ = "note_versions"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    changed_by_user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    change_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("idx_note_versions_note_number", "note_id", "version_number"),
    )

    def __repr__(self) -> str:
        return f"<NoteVersion(note_id={self.note_id}, version={self.version_number})>"
