"""Note sharing API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..core.schemas.common import MessageResponse, error_responses
from ..core.schemas.notes import NoteResponse
from ..core.schemas.sharing import (
    PermissionUpdateRequest,
    ShareGroupRequest,
    ShareResponse,
    ShareUserRequest,
)
from ..core.services import SharingService
from ..middleware.auth import get_current_user_id
from .dependencies import get_sharing_service

router = APIRouter(prefix="/shares", tags=["sharing"], responses=error_responses(400, 403, 404))


@router.get("/shared", response_model=List[NoteResponse])
async def shared_with_me(
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    """Notes other users shared with the caller, directly or through a group."""
    return await sharing_service.list_shared_with_me(current_user_id)


@router.post("/{note_id}/share-user", response_model=ShareResponse)
async def share_with_user(
    note_id: UUID,
    request: ShareUserRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    """Grant a user access. Re-sharing updates the permission."""
    return await sharing_service.share_with_user(
        note_id, current_user_id, request.user_id, request.permission
    )


@router.post("/{note_id}/share-group", response_model=ShareResponse)
async def share_with_group(
    note_id: UUID,
    request: ShareGroupRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    """Grant every member of a group access."""
    return await sharing_service.share_with_group(
        note_id, current_user_id, request.group_id, request.permission
    )


@router.delete("/{note_id}/unshare", response_model=MessageResponse)
async def unshare(
    note_id: UUID,
    user_id: Optional[UUID] = Query(None),
    group_id: Optional[UUID] = Query(None),
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    """Revoke a user or group grant."""
    removed = await sharing_service.revoke_share(
        note_id, current_user_id, user_id=user_id, group_id=group_id
    )
    return MessageResponse(message="Share revoked" if removed else "Nothing to revoke")


@router.put("/{note_id}/permission", response_model=ShareResponse)
async def update_permission(
    note_id: UUID,
    request: PermissionUpdateRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    return await sharing_service.update_permission(
        note_id, current_user_id, request.to_target(), request.permission
    )


@router.get("/{note_id}/shares", response_model=List[ShareResponse])
async def list_shares(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    sharing_service: SharingService = Depends(get_sharing_service),
):
    """All grants on a note. Owner only."""
    return await sharing_service.list_shares(note_id, current_user_id)
