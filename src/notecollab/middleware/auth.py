"""Authentication middleware."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication. Every failure is a 403."""

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> UUID:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Not authenticated"
            )
        if credentials.scheme.lower() != "bearer":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Invalid authentication scheme"
            )

        user_id = get_user_id_from_token(credentials.credentials)
        if not user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token or expired token"
            )
        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: UUID = Depends(JWTBearer())) -> UUID:
    """Get current authenticated user ID."""
    return user_id
