"""
Database models for NoteCollab application.

This package contains SQLAlchemy ORM models that define the database schema
for the collaborative note platform. All models are designed for async
operations.

Models included:
    - User: Account mirror from the identity service
    - Group / GroupMember: Read-only group memberships
    - Note: Note content, embedded share grants and version counter
    - Share: User- or group-targeted permission grants
    - NoteVersion: Append-only pre-edit snapshots
    - Comment: Comments on notes
    - Notification: Per-recipient notifications
    - Tag / NoteTag: Tags and their note associations
"""

from .base import BaseModel
from .comment import Comment
from .group import Group, GroupMember, GroupRole
from .note import Note
from .notification import Notification, NotificationStatus, NotificationType
from .share import GroupTarget, Share, SharePermission, ShareTarget, UserTarget
from .tag import NoteTag, Tag
from .user import User
from .version import NoteVersion

__all__ = [
    "BaseModel",
    "User",
    "Group",
    "GroupMember",
    "GroupRole",
    "Note",
    "Share",
    "SharePermission",
    "ShareTarget",
    "UserTarget",
    "GroupTarget",
    "NoteVersion",
    "Comment",
    "Notification",
    "NotificationStatus",
    "NotificationType",
    "Tag",
    "NoteTag",
]
