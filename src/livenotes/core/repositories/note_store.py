"""Authoritative in-memory note store."""

import threading
from typing import Callable, Dict, List, Optional

from ..errors import ForbiddenError, InvalidInputError, NotFoundError
from ..logging import get_logger
from ..models.note import Note, Snapshot
from ..models.types import new_note_id

logger = get_logger("notes")

ChangeListener = Callable[[Snapshot], None]


class NoteStore:
    """Single writer for the note collection.

    Every mutation runs under one lock and bumps the version. Listeners are
    called with the post-mutation snapshot while the lock is still held, so
    they observe snapshots in mutation order; they must not block or call
    back into the store.
    """

    def __init__(
        self,
        max_content_length: Optional[int] = None,
        id_factory: Callable[[], str] = new_note_id,
    ):
        self.max_content_length = max_content_length
        self._id_factory = id_factory
        self._lock = threading.Lock()
        # dicts keep insertion order, and reassigning a key keeps its slot
        self._notes: Dict[str, Note] = {}
        self._version = 0
        self._listeners: List[ChangeListener] = []

    def add_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def list_all(self) -> List[Note]:
        """All notes in creation order."""
        with self._lock:
            return list(self._notes.values())

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot()

    def get(self, note_id: str) -> Optional[Note]:
        with self._lock:
            return self._notes.get(note_id)

    def count(self) -> int:
        with self._lock:
            return len(self._notes)

    def create(self, author_id: str, content: str) -> Note:
        """Append a new note authored by ``author_id``."""
        self._validate_content(content)

        with self._lock:
            note_id = self._id_factory()
            while note_id in self._notes:
                note_id = self._id_factory()
            note = Note(id=note_id, content=content, author_id=author_id)
            self._notes[note.id] = note
            self._changed()

        logger.info("Note created", extra={"note_id": note.id, "author_id": author_id})
        return note

    def update(self, note_id: str, requester_id: str, content: str) -> Note:
        """Replace the content of a note owned by ``requester_id``."""
        with self._lock:
            note = self._owned_note(note_id, requester_id)
            self._validate_content(content)
            updated = note.with_content(content)
            self._notes[note_id] = updated
            self._changed()

        logger.info("Note updated", extra={"note_id": note_id, "author_id": requester_id})
        return updated

    def delete(self, note_id: str, requester_id: str) -> Note:
        """Remove a note owned by ``requester_id`` and return it."""
        with self._lock:
            self._owned_note(note_id, requester_id)
            removed = self._notes.pop(note_id)
            self._changed()

        logger.info("Note deleted", extra={"note_id": note_id, "author_id": requester_id})
        return removed

    def _owned_note(self, note_id: str, requester_id: str) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError("note not found", {"note_id": note_id})
        if not note.is_authored_by(requester_id):
            raise ForbiddenError("forbidden", {"note_id": note_id})
        return note

    def _validate_content(self, content: str) -> None:
        if not content or not content.strip():
            raise InvalidInputError("content required")
        if self.max_content_length is not None and len(content) > self.max_content_length:
            raise InvalidInputError(
                f"content longer than {self.max_content_length} characters",
                {"max_length": self.max_content_length},
            )

    def _snapshot(self) -> Snapshot:
        return Snapshot(version=self._version, notes=tuple(self._notes.values()))

    def _changed(self) -> None:
        # caller holds the lock
        self._version += 1
        snapshot = self._snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Change listener failed", extra={"version": snapshot.version})
