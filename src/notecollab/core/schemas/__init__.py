"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for notes, sharing, notifications and common
responses (errors and health).
"""

from .common import ErrorResponse, HealthCheckResponse, MessageResponse, error_responses
from .notes import (
    CommentCreate,
    CommentResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    TagAttachRequest,
    TagSummary,
    VersionResponse,
    VersionRestoreRequest,
)
from .notifications import MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from .sharing import (
    PermissionUpdateRequest,
    ShareGroupRequest,
    ShareResponse,
    ShareUserRequest,
    TargetSelector,
)

__all__ = [
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "TagSummary",
    "TagAttachRequest",
    "VersionResponse",
    "VersionRestoreRequest",
    "CommentCreate",
    "CommentResponse",
    # Sharing schemas
    "ShareUserRequest",
    "ShareGroupRequest",
    "PermissionUpdateRequest",
    "TargetSelector",
    "ShareResponse",
    # Notification schemas
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
    # Common schemas
    "ErrorResponse",
    "error_responses",
    "MessageResponse",
    "HealthCheckResponse",
]
