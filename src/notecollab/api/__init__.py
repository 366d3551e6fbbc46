"""API routers for NoteCollab."""

from .health import router as health_router
from .notes import router as notes_router
from .notifications import router as notifications_router
from .realtime import router as realtime_router
from .shares import router as shares_router

__all__ = [
    "health_router",
    "notes_router",
    "notifications_router",
    "realtime_router",
    "shares_router",
]
