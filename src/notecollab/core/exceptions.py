"""
Service-level errors.

Services raise these; the HTTP boundary (see ``main``) turns them into a
status code and an ``{"error": message}`` body.
"""


class NoteCollabError(Exception):
    """Base class for expected service failures."""

    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(NoteCollabError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class ForbiddenError(NoteCollabError):
    """Authenticated but lacking the required permission level."""

    status_code = 403
    default_message = "Access denied"


class NotFoundError(NoteCollabError):
    """Resource absent, or not owned by the caller."""

    status_code = 404
    default_message = "Not found"


class ConflictError(NoteCollabError):
    """The note moved on since the caller last read it."""

    status_code = 409
    default_message = "Note was modified concurrently"


class TransientStoreError(NoteCollabError):
    """The database could not be reached. Not retried here."""

    status_code = 500
    default_message = "Storage temporarily unavailable"
