"""
Note management schemas.

These schemas define the API contracts for note CRUD operations, tag
attachment, version history and comments.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .sharing import ShareResponse


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(max_length=200, description="Note title")
    content: str = Field(default="", description="Note content (rich text markup)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Meeting Notes - Q4 Planning",
                "content": "<h2>Agenda</h2><ol><li>Review Q3</li><li>Set Q4 goals</li></ol>",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema.

    Omitted fields keep their stored value. ``expected_version`` opts into a
    conflict check against the note's ``current_version``.
    """

    title: Optional[str] = Field(default=None, max_length=200, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    change_reason: str = Field(default="Updated", max_length=255, description="Why it changed")
    expected_version: Optional[int] = Field(
        default=None, ge=1, description="Reject the save if the note is no longer at this version"
    )


class TagSummary(BaseModel):
    id: uuid.UUID
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class TagAttachRequest(BaseModel):
    tag_id: uuid.UUID = Field(description="Existing tag to attach")


class NoteResponse(BaseModel):
    """Complete note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    owner_id: uuid.UUID = Field(description="Note owner ID")
    tags: List[TagSummary] = Field(default_factory=list, description="Attached tags")

    is_shared: bool = Field(description="Whether any grant exists on the note")
    # Only populated for the owner
    shares: List[ShareResponse] = Field(default_factory=list, description="Grants on the note")
    current_version: int = Field(description="Monotonic version counter")
    is_deleted: bool = Field(default=False, description="Soft-delete flag")
    access_level: str = Field(description="Caller's effective access (VIEW..OWNER)")

    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class VersionResponse(BaseModel):
    """Snapshot of a note taken before an edit."""

    id: uuid.UUID
    note_id: uuid.UUID
    version_number: int = Field(description="Note version this snapshot captured")
    title: str
    content: str
    changed_by_user_id: uuid.UUID
    change_reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VersionRestoreRequest(BaseModel):
    version_id: uuid.UUID = Field(description="Snapshot to restore")


class CommentCreate(BaseModel):
    content: str = Field(max_length=5000, description="Comment text")


class CommentResponse(BaseModel):
    id: uuid.UUID
    note_id: uuid.UUID
    author_id: uuid.UUID
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
