"""Health check API endpoints."""

from fastapi import APIRouter, Depends

from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..state import get_health_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthCheckResponse)
async def health_check(health_service: HealthService = Depends(get_health_service)):
    """Get overall system health status."""
    return await health_service.get_health_status()
