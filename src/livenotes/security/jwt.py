"""JWT token service."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from ..config import Settings, get_settings
from ..core.errors import UnauthenticatedError
from ..core.logging import get_logger

logger = get_logger("security.jwt")

TOKEN_TYPE = "access"


class TokenService:
    """Issues and verifies signed, time-limited identity tokens.

    Tokens are self-contained; nothing is stored server-side, so verification
    is a pure function of the token, the clock and the signing key.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.secret_key = settings.secret_key
        self.algorithm = settings.algorithm
        self.lifetime = timedelta(minutes=settings.access_token_expire_minutes)

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.lifetime.total_seconds())

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for ``user_id``."""
        issued_at = now or datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
            "type": TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Return verified claims or raise ``UnauthenticatedError``."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug("Token rejected", extra={"reason": str(e)})
            raise UnauthenticatedError("Invalid or expired token") from e

        if payload.get("type") != TOKEN_TYPE:
            raise UnauthenticatedError("Invalid or expired token")
        return payload

    def verify(self, token: str) -> str:
        """Return the user id embedded in a valid token."""
        user_id = self.decode(token).get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise UnauthenticatedError("Invalid or expired token")
        return user_id
