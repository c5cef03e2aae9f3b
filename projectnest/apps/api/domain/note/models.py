"""Note and note folder models."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)

from core.database import Base


class NoteFolder(Base):
    """Folder in a project's note tree."""

    __tablename__ = "note_folders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    folder_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    parent_folder_id = Column(
        Integer, ForeignKey("note_folders.id", ondelete="CASCADE"), nullable=True
    )

    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("ix_note_folders_project_parent", "project_id", "parent_folder_id"),
    )


class Note(Base):
    """Block-structured note."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    note_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    folder_id = Column(
        Integer, ForeignKey("note_folders.id", ondelete="SET NULL"), nullable=True
    )

    title = Column(String(255), nullable=False)
    content_json = Column(Text, nullable=False, default='{"blocks":[]}')
    position = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("ix_notes_project_position", "project_id", "position"),
        Index("ix_notes_folder", "folder_id"),
    )
