# Declarative base shared by every table
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .types import GUID


def utcnow() -> datetime:
    """Timezone-aware now; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


class BaseModel(DeclarativeBase):
    """UUID primary key plus creation and last-change timestamps.

    Timestamps are set in Python rather than by the server so SQLite and
    PostgreSQL order rows the same way down to the microsecond.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
