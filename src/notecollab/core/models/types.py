"""Custom SQLAlchemy types for NoteCollab models with cross-DB support."""

import uuid

from sqlalchemy import String, TypeDecorator


class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.

    - Uses PostgreSQL UUID type when available
    - Falls back to CHAR(36) storing hex string form on other DBs (e.g., SQLite)
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        # SQLite hands back the string form
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
