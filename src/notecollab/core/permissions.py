"""
Effective access computation for notes.

Pure functions only: callers fetch the note (with its grants) and the
user's group memberships, then ask what the user is allowed to do.
"""

from enum import IntEnum
from typing import Iterable, Optional
from uuid import UUID

from .models.share import SharePermission


class AccessLevel(IntEnum):
    """Effective access a user holds on a note, weakest first."""

    NONE = 0
    VIEW = 1
    COMMENT = 2
    EDIT = 3
    OWNER = 4

    @classmethod
    def from_permission(cls, permission: SharePermission) -> "AccessLevel":
        return cls[SharePermission(permission).value]


def effective_permission(note, user_id: UUID, user_group_ids: Optional[Iterable[UUID]] = None) -> AccessLevel:
    """Return the strongest access ``user_id`` has on ``note``.

    ``note`` only needs ``owner_id`` and ``shares``; each share exposes
    ``target_user_id``, ``target_group_id`` and ``permission``. When several
    grants apply (direct and through groups) the highest one wins.
    """
    if note.owner_id == user_id:
        return AccessLevel.OWNER

    group_ids = set(user_group_ids or ())
    best = AccessLevel.NONE
    for share in note.shares:
        if share.target_user_id is not None:
            applies = share.target_user_id == user_id
        else:
            applies = share.target_group_id in group_ids
        if applies:
            best = max(best, AccessLevel.from_permission(share.permission))
    return best


def can_view(level: AccessLevel) -> bool:
    return level >= AccessLevel.VIEW


def can_comment(level: AccessLevel) -> bool:
    return level >= AccessLevel.COMMENT


def can_edit(level: AccessLevel) -> bool:
    return level >= AccessLevel.EDIT


def is_owner(level: AccessLevel) -> bool:
    return level == AccessLevel.OWNER
