"""Identifier and timestamp helpers shared by the in-memory models."""

import secrets
import uuid
from datetime import datetime, timezone


def new_user_id() -> str:
    """Random UUID4 string for a new user."""
    return str(uuid.uuid4())


def new_note_id() -> str:
    """Short URL-safe id for a new note (72 random bits)."""
    return secrets.token_urlsafe(9)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
