"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from ..core.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..core.services import AuthService
from ..middleware.auth import get_current_user_id
from ..state import get_auth_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user."""
    return await auth_service.register_user(request)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Login user and get a bearer token."""
    return await auth_service.authenticate_user(request)


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    current_user_id: str = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current user profile."""
    return await auth_service.get_current_user(current_user_id)
