"""Repository layer for data access."""

from .comment_repository import CommentRepository
from .group_repository import GroupRepository
from .note_repository import NoteRepository
from .notification_repository import NotificationRepository
from .share_repository import ShareRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository
from .version_repository import VersionRepository

__all__ = [
    "CommentRepository",
    "GroupRepository",
    "NoteRepository",
    "NotificationRepository",
    "ShareRepository",
    "TagRepository",
    "UserRepository",
    "VersionRepository",
]
