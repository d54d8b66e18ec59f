"""API routers for LiveNotes."""

from .auth import router as auth_router
from .health import router as health_router
from .live import router as live_router
from .notes import router as notes_router

__all__ = ["auth_router", "notes_router", "live_router", "health_router"]
