"""
Noteful Backend: Note Request/Response Schemas
==============================================

What:  Pydantic models defining the note API contract.
Why:   Strict type checks on the way in, escaping and field naming on the way out.
How:   The API speaks `folderId`; Python code uses `folder_id`. Aliases bridge
       the two in both directions.

Design Decision:
    Schemas are separate from SQLAlchemy models because:
    1. The API exposes `folderId` while the ORM attribute is `folder_id`
    2. Escaping belongs to presentation, not to stored data
    3. `modified` appears in responses but is never accepted from clients
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from app.services.sanitizer import escape_markup

REQUIRED_NOTE_FIELDS = ("name", "folderId", "content")


class NoteCreate(BaseModel):
    """
    Body of POST /notes.

    All three fields are required, but declared optional here so the
    router can answer "Missing 'folderId' in request body" rather than a
    schema error. `modified` and `id` are silently ignored if sent.
    """
    name: Optional[str] = Field(default=None)
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    content: Optional[str] = Field(default=None)

    model_config = {"populate_by_name": True}

    def as_payload(self) -> dict:
        """API-named view of the body, e.g. {"name": ..., "folderId": ..., "content": ...}."""
        return self.model_dump(by_alias=True)


class NoteUpdate(BaseModel):
    """Body of PATCH /notes/{note_id}; only supplied fields change."""
    name: Optional[str] = Field(default=None)
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    content: Optional[str] = Field(default=None)

    model_config = {"populate_by_name": True}

    def changes(self) -> dict:
        """Supplied fields keyed by ORM attribute name (folder_id, not folderId)."""
        return self.model_dump(exclude_none=True)


class NoteResponse(BaseModel):
    """
    What:  Serialized note, {id, name, modified, folderId, content}.
    Who:   Returned by GET /notes, GET /notes/{id}, POST /notes.

    `name` and `content` are HTML-escaped; `modified` is ISO 8601.
    """
    id: int = Field(description="Note identifier")
    name: str = Field(description="Note name, HTML-escaped")
    modified: datetime = Field(description="Creation timestamp (ISO 8601)")
    folder_id: int = Field(alias="folderId", description="Owning folder id")
    content: str = Field(description="Note body, HTML-escaped")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_serializer("name", "content")
    def escape_text(self, value: str) -> str:
        return escape_markup(value)
