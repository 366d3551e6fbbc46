"""JWT token utilities.

Tokens are issued by the identity service; this service only verifies them
and reads the user id from the ``sub`` claim.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings
from ..core.logging import get_logger

logger = get_logger("security.jwt")


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token. Used by tests and local tooling."""
    settings = get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire, "type": "access", "jti": str(uuid.uuid4())})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate an access token. Returns None if it is not usable."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None

    # Tokens without a type claim are accepted; refresh tokens are not
    if payload.get("type", "access") != "access":
        return None
    return payload


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """Extract user ID from token."""
    payload = decode_access_token(token)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    try:
        return UUID(str(user_id))
    except ValueError:
        return None
