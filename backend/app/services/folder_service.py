"""
Noteful Backend: Folder Service (Data Access)
=============================================

What:  The five CRUD statements for the `folders` table.
Why:   Keeps SQL out of the route handlers; routes deal in HTTP only.
How:   Each method issues exactly one parameterized statement on the session
       it is given. No transactions span methods and nothing is retried.
Who:   Called by the folder router (and the note router, to check folderId).

Return conventions:
    get_folder()     → Folder or None (absence is not an error here)
    insert_folder()  → the inserted Folder, id assigned by the database
    update_folder()  → number of rows changed
    delete_folder()  → number of rows removed

Any SQLAlchemyError is logged and re-raised as StorageError (→ 500).
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import MAX_ROW_ID
from app.exceptions import StorageError
from app.models.folder import Folder

logger = logging.getLogger(__name__)


class FolderService:
    """
    Data access for folders.

    Stateless: the session is passed into every call, so one instance
    serves every request.
    """

    async def list_folders(self, db: AsyncSession) -> List[Folder]:
        """SELECT every folder, in storage order (ascending id)."""
        try:
            result = await db.execute(select(Folder).order_by(Folder.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing folders: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve folders. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_folder(self, db: AsyncSession, folder_id: int) -> Optional[Folder]:
        """
        Retrieve a single folder by primary key.

        Returns:
            The Folder, or None when no row has this id. Ids outside the
            key column's range are answered without a query.
        """
        if not 1 <= folder_id <= MAX_ROW_ID:
            return None
        try:
            result = await db.execute(select(Folder).where(Folder.id == folder_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching folder %s: %s", folder_id, str(e))
            raise StorageError(
                message="Could not retrieve the folder. Please try again.",
                context={"folder_id": folder_id},
            ) from e

    async def insert_folder(self, db: AsyncSession, name: str) -> Folder:
        """
        INSERT ... RETURNING the new row.

        The name is stored exactly as given; escaping is a response concern.
        """
        try:
            result = await db.execute(
                insert(Folder).values(name=name).returning(Folder)
            )
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error inserting folder: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not create the folder. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def update_folder(self, db: AsyncSession, folder_id: int, fields: dict) -> int:
        """Partial UPDATE; only keys present in `fields` are written."""
        if not fields:
            return 0
        try:
            result = await db.execute(
                update(Folder).where(Folder.id == folder_id).values(**fields)
            )
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error("Database error updating folder %s: %s", folder_id, str(e))
            raise StorageError(
                message="Could not update the folder. Please try again.",
                context={"folder_id": folder_id, "fields": sorted(fields)},
            ) from e

    async def delete_folder(self, db: AsyncSession, folder_id: int) -> int:
        """DELETE by id. The notes foreign key cascades to the folder's notes."""
        try:
            result = await db.execute(delete(Folder).where(Folder.id == folder_id))
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error("Database error deleting folder %s: %s", folder_id, str(e))
            raise StorageError(
                message="Could not delete the folder. Please try again.",
                context={"folder_id": folder_id},
            ) from e


# Stateless, so a single shared instance is enough
folder_service = FolderService()
