"""Authentication service implementation."""

from starlette.concurrency import run_in_threadpool

from ...security.jwt import TokenService
from ..errors import InvalidInputError, NotFoundError
from ..logging import get_logger
from ..repositories.credential_store import CredentialStore
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .interfaces import IAuthService

logger = get_logger("auth")


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, credentials: CredentialStore, tokens: TokenService):
        self.credentials = credentials
        self.tokens = tokens

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        # password hashing is deliberately slow; keep it off the event loop
        user = await run_in_threadpool(
            self.credentials.register, request.username, request.password
        )
        return UserResponse.from_user(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a bearer token."""
        if not request.username or not request.password:
            raise InvalidInputError("username & password required")

        user = await run_in_threadpool(
            self.credentials.verify, request.username, request.password
        )
        token = self.tokens.issue(user.id)
        logger.info("User logged in", extra={"user_id": user.id})

        return TokenResponse(
            token=token,
            token_type="bearer",
            expires_in=self.tokens.expires_in,
            user=UserResponse.from_user(user),
        )

    async def get_current_user(self, user_id: str) -> UserResponse:
        """Get user by ID."""
        user = self.credentials.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.from_user(user)
