"""
User model for authentication.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .types import new_user_id, utcnow


@dataclass(frozen=True)
class User:
    """Registered identity; immutable once created."""

    username: str
    password_hash: str = field(repr=False)
    id: str = field(default_factory=new_user_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_public(self) -> dict:
        return {"id": self.id, "username": self.username}
