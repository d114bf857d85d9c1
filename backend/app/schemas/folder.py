"""
Noteful Backend: Folder Request/Response Schemas
================================================

What:  Pydantic models defining the folder API contract.
How:   Request models accept every field as optional so that the router can
       report "Missing 'name' in request body" itself instead of FastAPI's
       generic 422. Unknown fields are ignored.

The response model escapes `name` on the way out; rows are never modified.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from app.services.sanitizer import escape_markup


class FolderCreate(BaseModel):
    """Body of POST /folders."""
    name: Optional[str] = Field(default=None, description="Folder name (required, non-empty)")


class FolderUpdate(BaseModel):
    """Body of PATCH /folders/{folder_id}; only supplied fields change."""
    name: Optional[str] = Field(default=None, description="New folder name")

    def changes(self) -> dict:
        """Fields the client actually supplied (null means not being set)."""
        return self.model_dump(exclude_none=True)


class FolderResponse(BaseModel):
    """
    What:  Serialized folder, {id, name}.
    Who:   Returned by GET /folders, GET /folders/{id}, POST /folders.
    """
    id: int = Field(description="Folder identifier")
    name: str = Field(description="Folder name, HTML-escaped")

    model_config = {"from_attributes": True}

    @field_serializer("name")
    def escape_name(self, name: str) -> str:
        return escape_markup(name)
