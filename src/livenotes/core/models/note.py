"""
Note model and snapshot value object.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Tuple

from .types import new_note_id, utcnow


@dataclass(frozen=True)
class Note:
    """A short text note owned by its author.

    Instances are immutable; an edit produces a new instance with the same
    ``id`` and ``author_id`` so snapshots handed out earlier never change.
    """

    content: str
    author_id: str
    id: str = field(default_factory=new_note_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def is_authored_by(self, user_id: str) -> bool:
        return self.author_id == user_id

    def with_content(self, content: str) -> "Note":
        """Copy with new content; id and author are preserved."""
        return replace(self, content=content, updated_at=utcnow())

    def to_public(self) -> Dict[str, Any]:
        """Public projection sent over HTTP and the live channel."""
        return {"id": self.id, "content": self.content, "authorId": self.author_id}


@dataclass(frozen=True)
class Snapshot:
    """Full ordered note list at one point in the store's history."""

    version: int
    notes: Tuple[Note, ...]

    def to_public(self) -> List[Dict[str, Any]]:
        return [note.to_public() for note in self.notes]

    def to_event(self) -> Dict[str, Any]:
        """Live channel payload."""
        return {"type": "notes_updated", "version": self.version, "notes": self.to_public()}
