"""Shared FastAPI dependencies for building services per request."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.services import NoteService, NotificationService, SharingService
from ..database import get_db_session
from ..realtime import SessionManager


def get_session_manager(request: Request) -> SessionManager:
    """The app-wide room registry created in ``create_app``."""
    return request.app.state.session_manager


async def get_note_service(session: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(session)


async def get_notification_service(
    session: AsyncSession = Depends(get_db_session),
    session_manager: SessionManager = Depends(get_session_manager),
) -> NotificationService:
    return NotificationService(session, session_manager=session_manager)


async def get_sharing_service(
    session: AsyncSession = Depends(get_db_session),
    session_manager: SessionManager = Depends(get_session_manager),
) -> SharingService:
    notifications = NotificationService(session, session_manager=session_manager)
    return SharingService(session, notifications=notifications)
