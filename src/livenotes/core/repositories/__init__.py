"""Repository layer: the in-memory stores that own application state."""

from .credential_store import CredentialStore
from .note_store import NoteStore

__all__ = ["CredentialStore", "NoteStore"]
