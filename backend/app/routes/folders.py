"""
Noteful Backend: Folder Route Handlers
======================================

What:  CRUD endpoints for folders.
How:   Parse the request, check required fields, validate, delegate to
       FolderService, serialize with FolderResponse (which escapes `name`).

Route Inventory:
    GET    /folders               list all folders
    POST   /folders               create a folder (201 + Location)
    GET    /folders/{folder_id}   one folder
    PATCH  /folders/{folder_id}   partial update (204)
    DELETE /folders/{folder_id}   delete, cascading to its notes (204)

Every /{folder_id} route depends on resolve_folder, so an unknown id
answers 404 "Folder doesn't exist" before any other check runs.
"""

import logging
import posixpath
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_session, get_db_session
from app.exceptions import NotFoundError, ValidationError
from app.models.folder import Folder
from app.schemas.common import ErrorResponse
from app.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from app.services.folder_service import folder_service
from app.services.validators import get_folder_validation_error, require_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["Folders"])


async def resolve_folder(
    request: Request,
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Folder:
    """Load the folder named in the path or stop the request with a 404."""
    folder = await folder_service.get_folder(db, folder_id)
    if folder is None:
        logger.error("Folder with %s not found", folder_id)
        raise NotFoundError(resource="Folder", resource_id=folder_id)
    request.state.resource = ("Folder", folder.id)
    return folder


@router.get("/", response_model=List[FolderResponse], include_in_schema=False)
@router.get(
    "",
    response_model=List[FolderResponse],
    summary="List all folders",
)
async def list_folders(
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    folders = await folder_service.list_folders(db)
    return [FolderResponse.model_validate(folder) for folder in folders]


@router.post("/", status_code=201, response_model=FolderResponse, include_in_schema=False)
@router.post(
    "",
    status_code=201,
    response_model=FolderResponse,
    responses={400: {"description": "Missing or empty name", "model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    request: Request,
    response: Response,
    body: Optional[FolderCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    """
    Create a folder and point the client at it.

    Checks, in order:
        1. `name` present and not null → else "Missing 'name' in request body"
        2. `name` non-empty           → else "Folder name can't be empty"
    """
    payload = body or FolderCreate()
    require_fields(payload.model_dump(), ("name",))

    error = get_folder_validation_error(payload.name)
    if error:
        raise ValidationError(message=error, field="name")

    folder = await folder_service.insert_folder(db, payload.name)
    await commit_session(db)
    request.state.resource = ("Folder", folder.id)
    logger.info("Folder with id %s created", folder.id)

    response.headers["Location"] = posixpath.join(request.url.path, str(folder.id))
    return FolderResponse.model_validate(folder)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="Get a single folder by ID",
)
async def get_folder(folder: Folder = Depends(resolve_folder)) -> FolderResponse:
    return FolderResponse.model_validate(folder)


@router.delete(
    "/{folder_id}",
    status_code=204,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="Delete a folder and its notes",
)
async def delete_folder(
    folder: Folder = Depends(resolve_folder),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete_folder(db, folder.id)
    await commit_session(db)
    logger.info("Folder with id %s deleted", folder.id)
    return Response(status_code=204)


@router.patch(
    "/{folder_id}",
    status_code=204,
    responses={
        400: {"description": "No updatable field supplied", "model": ErrorResponse},
        404: {"description": "Folder not found", "model": ErrorResponse},
    },
    summary="Rename a folder",
)
async def update_folder(
    body: Optional[FolderUpdate] = None,
    folder: Folder = Depends(resolve_folder),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Partial update. A body whose fields are all absent or falsy (including
    {"name": ""}) is rejected before touching storage.
    """
    payload = body or FolderUpdate()
    if not any(payload.model_dump().values()):
        raise ValidationError(message="Request body must contain 'name'")

    error = get_folder_validation_error(payload.name)
    if error:
        raise ValidationError(message=error, field="name")

    await folder_service.update_folder(db, folder.id, payload.changes())
    await commit_session(db)
    return Response(status_code=204)
