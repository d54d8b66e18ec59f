"""Notes API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..middleware.auth import get_current_user_id
from ..state import get_note_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=List[NoteResponse])
async def list_notes(note_service: NoteService = Depends(get_note_service)):
    """List all notes; no authentication needed."""
    return await note_service.list_notes()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: str = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return await note_service.create_note(current_user_id, request)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user_id: str = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note (author only)."""
    return await note_service.update_note(note_id, current_user_id, request)


@router.delete("/{note_id}", response_model=NoteResponse)
async def delete_note(
    note_id: str,
    current_user_id: str = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note (author only) and echo it back."""
    return await note_service.delete_note(note_id, current_user_id)
