"""Notes API endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..core.schemas.common import error_responses
from ..core.schemas.notes import (
    CommentCreate,
    CommentResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    TagAttachRequest,
    VersionResponse,
    VersionRestoreRequest,
)
from ..core.services import NoteService
from ..middleware.auth import get_current_user_id
from .dependencies import get_note_service

router = APIRouter(prefix="/notes", tags=["notes"], responses=error_responses(400, 403, 404, 409))


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return await note_service.create_note(current_user_id, request)


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    tag_id: Optional[UUID] = Query(None, description="Only notes carrying this tag"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or content"),
    start_date: Optional[datetime] = Query(None, description="Created at or after"),
    end_date: Optional[datetime] = Query(None, description="Created at or before"),
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """List the caller's own notes, most recently updated first."""
    return await note_service.list_user_notes(
        current_user_id, tag_id=tag_id, search=search, start_date=start_date, end_date=end_date
    )


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return await note_service.get_note(note_id, current_user_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note, keeping the previous state as a version."""
    return await note_service.update_note(note_id, current_user_id, request)


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Soft-delete a note."""
    await note_service.delete_note(note_id, current_user_id)


@router.post("/{note_id}/tags", response_model=NoteResponse)
async def add_tag(
    note_id: UUID,
    request: TagAttachRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    return await note_service.add_tag(note_id, current_user_id, request.tag_id)


@router.delete("/{note_id}/tags/{tag_id}", response_model=NoteResponse)
async def remove_tag(
    note_id: UUID,
    tag_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    return await note_service.remove_tag(note_id, current_user_id, tag_id)


@router.get("/{note_id}/versions", response_model=List[VersionResponse])
async def list_versions(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Version history, newest first. Owner only."""
    return await note_service.list_versions(note_id, current_user_id)


@router.post("/{note_id}/versions/restore", response_model=NoteResponse)
async def restore_version(
    note_id: UUID,
    request: VersionRestoreRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Restore an earlier version. The current state is kept as a new version."""
    return await note_service.restore_version(note_id, current_user_id, request.version_id)


@router.post("/{note_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    note_id: UUID,
    request: CommentCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    return await note_service.add_comment(note_id, current_user_id, request.content)


@router.get("/{note_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    return await note_service.list_comments(note_id, current_user_id)
