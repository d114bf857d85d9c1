"""
Noteful Backend: Note Service (Data Access)
===========================================

What:  The five CRUD statements for the `notes` table.
How:   One parameterized statement per call on the caller's session.
Who:   Called by the note router.

`modified` is filled in by the model default at insert time and is never
part of an update.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import MAX_ROW_ID
from app.exceptions import StorageError
from app.models.note import Note

logger = logging.getLogger(__name__)

# Columns a client may change through PATCH
UPDATABLE_FIELDS = frozenset({"name", "content", "folder_id"})


class NoteService:
    """Data access for notes. Stateless; sessions are passed per call."""

    async def list_notes(self, db: AsyncSession) -> List[Note]:
        try:
            result = await db.execute(select(Note).order_by(Note.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_note(self, db: AsyncSession, note_id: int) -> Optional[Note]:
        """Note by primary key, or None (also for ids no key column can hold)."""
        if not 1 <= note_id <= MAX_ROW_ID:
            return None
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            ) from e

    async def insert_note(
        self,
        db: AsyncSession,
        name: str,
        folder_id: int,
        content: str,
    ) -> Note:
        """
        INSERT ... RETURNING the new row, including the assigned id and
        the `modified` timestamp.

        Args:
            db: Async database session (injected by FastAPI)
            name: Note name, stored verbatim
            folder_id: Owning folder; must already exist
            content: Note body, stored verbatim

        Raises:
            StorageError: The insert failed (including foreign key violations)
        """
        try:
            result = await db.execute(
                insert(Note)
                .values(name=name, folder_id=folder_id, content=content)
                .returning(Note)
            )
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error inserting note: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not create the note. Please try again.",
                context={"folder_id": folder_id, "error_type": type(e).__name__},
            ) from e

    async def update_note(self, db: AsyncSession, note_id: int, fields: dict) -> int:
        """Partial UPDATE of name/content/folder_id; other keys are dropped."""
        values = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not values:
            return 0
        try:
            result = await db.execute(
                update(Note).where(Note.id == note_id).values(**values)
            )
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "fields": sorted(values)},
            ) from e

    async def delete_note(self, db: AsyncSession, note_id: int) -> int:
        try:
            result = await db.execute(delete(Note).where(Note.id == note_id))
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            ) from e


note_service = NoteService()
