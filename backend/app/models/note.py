"""
Noteful Backend: Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for CRUD statements and by Alembic for schema management.

Table Design:
    - id: integer primary key assigned by the database
    - name, content: free text, stored exactly as the client sent it
      (escaping happens in the response schema, never on write)
    - folderId: foreign key to folders.id, ON DELETE CASCADE
    - modified: set at creation, not client-writable
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Note(Base):
    """
    A text entry belonging to exactly one folder.

    Query Patterns:
        - List all notes: SELECT ... FROM notes
        - Get single note: SELECT ... WHERE id = :id (primary key lookup)
        - Cascade on folder delete: uses idx_notes_folder_id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Python attribute folder_id, column "folderId" to match the API field
    folder_id: Mapped[int] = mapped_column(
        "folderId",
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
    )

    # UTC with timezone; the Python default also covers INSERT ... RETURNING
    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_notes_folder_id", "folderId"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, name='{self.name}', "
            f"folder_id={self.folder_id}, modified='{self.modified}')>"
        )
