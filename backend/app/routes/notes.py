"""
Noteful Backend: Note Route Handlers
====================================

What:  CRUD endpoints for notes, mirroring the folder router.
How:   Required fields are checked in the order name, folderId, content;
       the folder a note points at must exist; responses go through
       NoteResponse, which escapes `name` and `content`.

Route Inventory:
    GET    /notes             list all notes
    POST   /notes             create a note (201 + Location)
    GET    /notes/{note_id}   one note
    PATCH  /notes/{note_id}   partial update of name/content/folderId (204)
    DELETE /notes/{note_id}   delete (204)
"""

import logging
import posixpath
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_session, get_db_session
from app.exceptions import NotFoundError, ValidationError
from app.models.note import Note
from app.schemas.common import ErrorResponse
from app.schemas.note import REQUIRED_NOTE_FIELDS, NoteCreate, NoteResponse, NoteUpdate
from app.services.folder_service import folder_service
from app.services.note_service import note_service
from app.services.validators import get_note_validation_error, require_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


async def resolve_note(
    request: Request,
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Note:
    """Load the note named in the path or stop the request with a 404."""
    note = await note_service.get_note(db, note_id)
    if note is None:
        logger.error("Note with %s not found", note_id)
        raise NotFoundError(resource="Note", resource_id=note_id)
    request.state.resource = ("Note", note.id)
    return note


async def ensure_folder_exists(db: AsyncSession, folder_id: int) -> None:
    # Reported as a client error instead of letting the foreign key fail with a 500
    if await folder_service.get_folder(db, folder_id) is None:
        raise ValidationError(
            message="'folderId' must reference an existing folder",
            field="folderId",
            context={"folder_id": folder_id},
        )


@router.get("/", response_model=List[NoteResponse], include_in_schema=False)
@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    notes = await note_service.list_notes(db)
    return [NoteResponse.model_validate(note) for note in notes]


@router.post("/", status_code=201, response_model=NoteResponse, include_in_schema=False)
@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={400: {"description": "Missing field or unknown folder", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    request: Request,
    response: Response,
    body: Optional[NoteCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    payload = body or NoteCreate()
    require_fields(payload.as_payload(), REQUIRED_NOTE_FIELDS)

    error = get_note_validation_error(payload.name)
    if error:
        raise ValidationError(message=error, field="name")

    await ensure_folder_exists(db, payload.folder_id)

    note = await note_service.insert_note(
        db,
        name=payload.name,
        folder_id=payload.folder_id,
        content=payload.content,
    )
    await commit_session(db)
    request.state.resource = ("Note", note.id)
    logger.info("Note with id %s created", note.id)

    response.headers["Location"] = posixpath.join(request.url.path, str(note.id))
    return NoteResponse.model_validate(note)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by ID",
)
async def get_note(note: Note = Depends(resolve_note)) -> NoteResponse:
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note: Note = Depends(resolve_note),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note.id)
    await commit_session(db)
    logger.info("Note with id %s deleted", note.id)
    return Response(status_code=204)


@router.patch(
    "/{note_id}",
    status_code=204,
    responses={
        400: {"description": "No updatable field supplied", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    body: Optional[NoteUpdate] = None,
    note: Note = Depends(resolve_note),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Partial update of name, content and folderId. Fields left out keep
    their stored values; `modified` cannot be changed.
    """
    payload = body or NoteUpdate()
    if not any(payload.model_dump().values()):
        raise ValidationError(
            message="Request body must contain either 'name', 'content', or 'folderId'"
        )

    error = get_note_validation_error(payload.name)
    if error:
        raise ValidationError(message=error, field="name")

    if payload.folder_id is not None:
        await ensure_folder_exists(db, payload.folder_id)

    await note_service.update_note(db, note.id, payload.changes())
    await commit_session(db)
    return Response(status_code=204)
