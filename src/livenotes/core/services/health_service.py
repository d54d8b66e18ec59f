"""Health service implementation."""

from datetime import datetime, timezone
from typing import Any, Dict

from ... import __version__
from ...config import Settings
from ..repositories.credential_store import CredentialStore
from ..repositories.note_store import NoteStore
from ..schemas.common import HealthCheckResponse
from .broadcast_hub import BroadcastHub
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Reports on the in-memory state; there are no external backends."""

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialStore,
        notes: NoteStore,
        hub: BroadcastHub,
    ):
        self.settings = settings
        self.credentials = credentials
        self.notes = notes
        self.hub = hub

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        checks = {
            "notes": await self.check_note_store(),
            "users": {"status": "healthy", "count": self.credentials.count()},
            "live": {"status": "healthy", "subscribers": self.hub.subscriber_count()},
            "security": self.check_security(),
        }

        overall_status = "healthy"
        if any(check["status"] != "healthy" for check in checks.values()):
            overall_status = "degraded"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            checks=checks,
        )

    async def check_note_store(self) -> Dict[str, Any]:
        snapshot = self.notes.snapshot()
        return {"status": "healthy", "count": len(snapshot.notes), "version": snapshot.version}

    def check_security(self) -> Dict[str, Any]:
        if self.settings.uses_insecure_secret:
            return {
                "status": "degraded",
                "warning": "default signing secret in use; not suitable for production",
            }
        return {"status": "healthy"}
