"""Request authentication: bearer tokens resolved to a user id."""

from .auth import JWTBearer, get_current_user_id

__all__ = ["JWTBearer", "get_current_user_id"]
