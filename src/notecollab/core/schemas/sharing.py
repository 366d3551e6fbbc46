"""
Note sharing schemas.

These schemas define the API contracts for granting, changing and revoking
user- and group-targeted permissions on a note.
"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.share import GroupTarget, SharePermission, ShareTarget, UserTarget


class ShareUserRequest(BaseModel):
    """Share a note with a single user."""

    user_id: uuid.UUID = Field(description="User receiving access")
    permission: SharePermission = Field(default=SharePermission.VIEW, description="Granted level")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"user_id": "456e7890-e89b-12d3-a456-426614174000", "permission": "EDIT"}
        }
    )


class ShareGroupRequest(BaseModel):
    """Share a note with every member of a group."""

    group_id: uuid.UUID = Field(description="Group receiving access")
    permission: SharePermission = Field(default=SharePermission.VIEW, description="Granted level")


class TargetSelector(BaseModel):
    """Picks exactly one grant target: a user or a group."""

    user_id: Optional[uuid.UUID] = Field(default=None, description="Target user")
    group_id: Optional[uuid.UUID] = Field(default=None, description="Target group")

    @model_validator(mode="after")
    def check_single_target(self):
        if (self.user_id is None) == (self.group_id is None):
            raise ValueError("Exactly one of user_id or group_id is required")
        return self

    def to_target(self) -> ShareTarget:
        if self.user_id is not None:
            return UserTarget(self.user_id)
        return GroupTarget(self.group_id)


class PermissionUpdateRequest(TargetSelector):
    """Change the level of an existing grant."""

    permission: SharePermission = Field(description="New permission level")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"user_id": "456e7890-e89b-12d3-a456-426614174000", "permission": "COMMENT"}
        }
    )


class ShareResponse(BaseModel):
    """A grant as seen by the note owner."""

    id: uuid.UUID = Field(description="Share record ID")
    note_id: uuid.UUID = Field(description="Shared note ID")
    target_type: Literal["user", "group"] = Field(description="What the grant targets")
    target_user_id: Optional[uuid.UUID] = Field(default=None)
    target_group_id: Optional[uuid.UUID] = Field(default=None)
    permission: SharePermission = Field(description="Permission level granted")
    shared_by_user_id: uuid.UUID = Field(description="Who granted it")
    created_at: datetime = Field(description="When the grant was created")

    @classmethod
    def from_share(cls, share) -> "ShareResponse":
        return cls(
            id=share.id,
            note_id=share.note_id,
            target_type="user" if share.target_user_id is not None else "group",
            target_user_id=share.target_user_id,
            target_group_id=share.target_group_id,
            permission=share.permission,
            shared_by_user_id=share.shared_by_user_id,
            created_at=share.created_at,
        )
