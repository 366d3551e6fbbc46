"""
Service layer: business rules on top of the repositories.

Services raise ``notecollab.core.exceptions`` errors; the API layer maps
them to HTTP responses.
"""

from .health_service import HealthService
from .interfaces import IHealthService, INoteService, INotificationService, ISharingService
from .note_service import NoteService, note_to_response
from .notification_service import NotificationService
from .sharing_service import SharingService

__all__ = [
    # Interfaces
    "INoteService",
    "ISharingService",
    "INotificationService",
    "IHealthService",
    # Implementations
    "NoteService",
    "SharingService",
    "NotificationService",
    "HealthService",
    "note_to_response",
]
