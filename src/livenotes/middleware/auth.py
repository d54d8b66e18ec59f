"""Authentication middleware."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.errors import UnauthenticatedError
from ..state import get_app_state


class JWTBearer(HTTPBearer):
    """Bearer token authentication resolving to a verified user id."""

    def __init__(self):
        # missing or non-bearer headers surface as our own Unauthenticated error
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> str:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise UnauthenticatedError("Unauthorized")

        return get_app_state(request).access.authenticate(credentials.credentials)


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: str = Depends(JWTBearer())) -> str:
    """Get current authenticated user ID."""
    return user_id
