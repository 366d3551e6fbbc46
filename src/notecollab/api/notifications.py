"""Notification API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..core.schemas.common import error_responses
from ..core.schemas.notifications import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from ..core.services import NotificationService
from ..middleware.auth import get_current_user_id
from .dependencies import get_notification_service

router = APIRouter(
    prefix="/notifications", tags=["notifications"], responses=error_responses(400, 403, 404)
)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    limit: Optional[int] = Query(None, description="How many to return (1-200)"),
    current_user_id: UUID = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    """The caller's notifications, newest first."""
    return await service.list(current_user_id, limit)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    current_user_id: UUID = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    return UnreadCountResponse(unread_count=await service.unread_count(current_user_id))


@router.put("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    current_user_id: UUID = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    return MarkAllReadResponse(updated=await service.mark_all_read(current_user_id))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    return await service.mark_read(notification_id, current_user_id)


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    await service.delete(notification_id, current_user_id)
