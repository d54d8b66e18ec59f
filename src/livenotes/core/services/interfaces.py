"""
Service interfaces for LiveNotes application.
"""

from abc import ABC, abstractmethod
from typing import List

from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a token."""

    @abstractmethod
    async def get_current_user(self, user_id: str) -> UserResponse:
        """Get user by ID."""


class INoteService(ABC):
    """Note operations; mutations are restricted to the note's author."""

    @abstractmethod
    async def list_notes(self) -> List[NoteResponse]:
        """List every note in creation order."""

    @abstractmethod
    async def create_note(self, user_id: str, request: NoteCreate) -> NoteResponse:
        """Create a note authored by ``user_id``."""

    @abstractmethod
    async def update_note(self, note_id: str, user_id: str, request: NoteUpdate) -> NoteResponse:
        """Replace the content of an owned note."""

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: str) -> NoteResponse:
        """Delete an owned note and return it."""


class IHealthService(ABC):
    """Health checks."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall application health."""
