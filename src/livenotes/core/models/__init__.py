"""
In-memory domain models for LiveNotes.

Users and notes are plain frozen dataclasses; the repositories own the
collections that hold them.
"""

from .note import Note, Snapshot
from .user import User

__all__ = ["User", "Note", "Snapshot"]
