"""
Service layer interfaces and implementations.
"""

from .access_controller import (
    AccessController,
    ConnectionIdentity,
    IdentityStatus,
    SocketAuthPolicy,
)
from .auth_service import AuthService
from .broadcast_hub import BroadcastHub, Subscriber
from .health_service import HealthService
from .interfaces import IAuthService, IHealthService, INoteService
from .note_service import NoteService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "IHealthService",
    # Implementations
    "AccessController",
    "AuthService",
    "BroadcastHub",
    "HealthService",
    "NoteService",
    # Live channel types
    "ConnectionIdentity",
    "IdentityStatus",
    "SocketAuthPolicy",
    "Subscriber",
]
