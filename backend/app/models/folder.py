"""
Noteful Backend: Folder SQLAlchemy Model
========================================

What:  ORM model representing the `folders` table.
Who:   Used by FolderService for CRUD statements and by Alembic for schema management.

A folder owns zero or more notes. Deleting a folder deletes its notes; the
cascade lives in the notes.folderId foreign key (ON DELETE CASCADE) and is
enforced by the database.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Folder(Base):
    """A named grouping of notes."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Never an empty string; enforced by the folder validator before insert/update
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
