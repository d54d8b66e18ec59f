# Application state container and FastAPI dependencies
from dataclasses import dataclass
from typing import Optional

from starlette.requests import HTTPConnection

from .config import Settings, get_settings
from .core.repositories import CredentialStore, NoteStore
from .core.services import (
    AccessController,
    AuthService,
    BroadcastHub,
    HealthService,
    NoteService,
    SocketAuthPolicy,
)
from .security import TokenService


@dataclass
class AppState:
    """Everything one running app owns; handlers reach it through ``app.state``."""

    settings: Settings
    credentials: CredentialStore
    tokens: TokenService
    notes: NoteStore
    hub: BroadcastHub
    access: AccessController


def build_state(settings: Optional[Settings] = None) -> AppState:
    """Wire a fresh, empty set of stores and services."""
    settings = settings or get_settings()
    credentials = CredentialStore()
    tokens = TokenService(settings)
    notes = NoteStore(max_content_length=settings.max_note_length)
    hub = BroadcastHub(notes, heartbeat_interval=settings.heartbeat_interval_seconds)
    access = AccessController(
        tokens, credentials, socket_policy=SocketAuthPolicy(settings.socket_auth_policy)
    )
    return AppState(
        settings=settings,
        credentials=credentials,
        tokens=tokens,
        notes=notes,
        hub=hub,
        access=access,
    )


def get_app_state(conn: HTTPConnection) -> AppState:
    """Get the state of the app serving this request or websocket."""
    return conn.app.state.livenotes


def get_auth_service(conn: HTTPConnection) -> AuthService:
    state = get_app_state(conn)
    return AuthService(state.credentials, state.tokens)


def get_note_service(conn: HTTPConnection) -> NoteService:
    return NoteService(get_app_state(conn).notes)


def get_health_service(conn: HTTPConnection) -> HealthService:
    state = get_app_state(conn)
    return HealthService(state.settings, state.credentials, state.notes, state.hub)
