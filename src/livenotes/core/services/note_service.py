"""Note service implementation."""

from typing import List

from ..repositories.note_store import NoteStore
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService


class NoteService(INoteService):
    """Maps note requests onto the store.

    Ownership and content rules are enforced by ``NoteStore`` itself; the
    broadcast hub hears about every mutation through the store's listeners.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    async def list_notes(self) -> List[NoteResponse]:
        return NoteResponse.from_notes(self.store.list_all())

    async def create_note(self, user_id: str, request: NoteCreate) -> NoteResponse:
        note = self.store.create(user_id, request.content)
        return NoteResponse.from_note(note)

    async def update_note(self, note_id: str, user_id: str, request: NoteUpdate) -> NoteResponse:
        note = self.store.update(note_id, user_id, request.content)
        return NoteResponse.from_note(note)

    async def delete_note(self, note_id: str, user_id: str) -> NoteResponse:
        note = self.store.delete(note_id, user_id)
        return NoteResponse.from_note(note)
