"""In-memory credential store for registered users."""

import threading
from typing import Callable, Dict, Optional

from ...security.password import burn_verification, hash_password, verify_password
from ..errors import ConflictError, InvalidInputError, UnauthenticatedError
from ..logging import get_logger
from ..models.user import User

logger = get_logger("credentials")

INVALID_CREDENTIALS = "Invalid credentials"


class CredentialStore:
    """Owns user identities and their salted password hashes.

    Hashing is slow on purpose, so it runs outside the lock; the uniqueness
    check is repeated under the lock right before insertion.
    """

    def __init__(
        self,
        hasher: Callable[[str], str] = hash_password,
        verifier: Callable[[str, str], bool] = verify_password,
    ):
        self._hasher = hasher
        self._verifier = verifier
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        # casefolded username -> user id
        self._by_username: Dict[str, str] = {}

    def register(self, username: str, password: str) -> User:
        """Create a user; usernames are unique ignoring case."""
        if not username or not password:
            raise InvalidInputError("username & password required")

        key = username.casefold()
        if self._is_taken(key):
            raise ConflictError("username already exists")

        password_hash = self._hasher(password)

        with self._lock:
            if key in self._by_username:
                raise ConflictError("username already exists")
            user = User(username=username, password_hash=password_hash)
            self._users[user.id] = user
            self._by_username[key] = user.id

        logger.info("User registered", extra={"user_id": user.id, "username": username})
        return user

    def verify(self, username: str, password: str) -> User:
        """Return the user when both username (exact case) and password match."""
        user = self.get_by_username(username)
        if user is None or user.username != username:
            burn_verification()
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not self._verifier(password, user.password_hash):
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        return user

    def get(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive lookup."""
        with self._lock:
            user_id = self._by_username.get(username.casefold())
            return self._users.get(user_id) if user_id else None

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _is_taken(self, key: str) -> bool:
        with self._lock:
            return key in self._by_username
