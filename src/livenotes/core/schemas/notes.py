"""
Note schemas.

Public note shape is ``{id, content, authorId}``.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..models.note import Note


class NoteCreate(BaseModel):
    """Note creation request schema."""

    content: str = Field(description="Note content")

    model_config = ConfigDict(json_schema_extra={"example": {"content": "hello"}})


class NoteUpdate(BaseModel):
    """Note update request schema; replaces the content."""

    content: str = Field(description="New note content")

    model_config = ConfigDict(json_schema_extra={"example": {"content": "hi"}})


class NoteResponse(BaseModel):
    """Public projection of a note."""

    id: str = Field(description="Note unique identifier")
    content: str = Field(description="Note content")
    author_id: str = Field(alias="authorId", description="Author user id")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"id": "k3J9xQ2mPa7w", "content": "hello", "authorId": "123e4567-e89b-12d3-a456-426614174000"}},
    )

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(id=note.id, content=note.content, author_id=note.author_id)

    @classmethod
    def from_notes(cls, notes: List[Note]) -> List["NoteResponse"]:
        return [cls.from_note(note) for note in notes]
