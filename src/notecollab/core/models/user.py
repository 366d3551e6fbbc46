"""
User model - read-only mirror of the identity service's accounts.
"""

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """User account known to the identity service."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint(
            "full_name IS NULL OR length(full_name) <= 100", name="ck_users_full_name_len"
        ),
        Index("idx_users_username", "username"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
