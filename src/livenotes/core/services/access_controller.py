"""Request authentication and live-connection identity."""

import enum
from dataclasses import dataclass
from typing import Optional

from ...security.jwt import TokenService
from ..errors import UnauthenticatedError
from ..logging import get_logger
from ..repositories.credential_store import CredentialStore

logger = get_logger("access")


class SocketAuthPolicy(str, enum.Enum):
    """What happens to a live connection without a usable token."""

    PERMISSIVE = "permissive"  # connect read-only as Anonymous
    STRICT = "strict"  # refuse the connection


class IdentityStatus(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ConnectionIdentity:
    status: IdentityStatus
    user_id: Optional[str] = None

    @classmethod
    def authenticated(cls, user_id: str) -> "ConnectionIdentity":
        return cls(IdentityStatus.AUTHENTICATED, user_id)

    @classmethod
    def anonymous(cls) -> "ConnectionIdentity":
        return cls(IdentityStatus.ANONYMOUS)

    @classmethod
    def rejected(cls) -> "ConnectionIdentity":
        return cls(IdentityStatus.REJECTED)

    @property
    def is_rejected(self) -> bool:
        return self.status is IdentityStatus.REJECTED

    @property
    def label(self) -> str:
        return self.user_id or self.status.value


class AccessController:
    """Turns request credentials into a verified user id.

    Tokens are verified on every call, nothing is cached. Ownership is not
    checked here; the note store enforces it using the id supplied by
    ``authenticate``.
    """

    def __init__(
        self,
        tokens: TokenService,
        credentials: CredentialStore,
        socket_policy: SocketAuthPolicy = SocketAuthPolicy.PERMISSIVE,
    ):
        self.tokens = tokens
        self.credentials = credentials
        self.socket_policy = SocketAuthPolicy(socket_policy)

    @staticmethod
    def extract_bearer(authorization: Optional[str]) -> Optional[str]:
        """Pull the token out of an ``Authorization: Bearer <token>`` value."""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    def authenticate(self, token: Optional[str]) -> str:
        """Return the user id for a valid token of a known user."""
        if not token:
            raise UnauthenticatedError("Unauthorized")

        user_id = self.tokens.verify(token)
        # signing key can outlive the in-memory users across restarts
        if self.credentials.get(user_id) is None:
            logger.info("Token for unknown user rejected", extra={"user_id": user_id})
            raise UnauthenticatedError("Unauthorized")
        return user_id

    def identify_connection(self, token: Optional[str]) -> ConnectionIdentity:
        """Resolve a live connection's identity under the socket policy."""
        try:
            return ConnectionIdentity.authenticated(self.authenticate(token))
        except UnauthenticatedError:
            if self.socket_policy is SocketAuthPolicy.STRICT:
                return ConnectionIdentity.rejected()
            return ConnectionIdentity.anonymous()
