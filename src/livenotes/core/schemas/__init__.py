"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .common import ErrorResponse, HealthCheckResponse
from .notes import NoteCreate, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    # Common schemas
    "ErrorResponse",
    "HealthCheckResponse",
]
