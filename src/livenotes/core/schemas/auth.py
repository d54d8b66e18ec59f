"""
Authentication schemas.

These schemas define the API contracts for registration, login and
the identity returned alongside a token. Only the presence and type of
fields is checked here; emptiness rules live in the credential store.
"""

from pydantic import BaseModel, ConfigDict, Field

from ..models.user import User


class RegisterRequest(BaseModel):
    """User registration request schema."""

    username: str = Field(max_length=50, description="Unique username (case-insensitive)")
    password: str = Field(max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "alice", "password": "pw1"}}
    )


class LoginRequest(BaseModel):
    """User login request schema."""

    username: str = Field(description="Username, exact case")
    password: str = Field(description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "alice", "password": "pw1"}}
    )


class UserResponse(BaseModel):
    """Public user information."""

    id: str = Field(description="User unique identifier")
    username: str = Field(description="Username")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username)


class TokenResponse(BaseModel):
    """Login response: a bearer token plus the authenticated user."""

    token: str = Field(description="Signed access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse = Field(description="User information")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 7200,
                "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "username": "alice"},
            }
        }
    )
