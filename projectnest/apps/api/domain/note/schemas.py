"""Note, note content and folder schemas."""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from domain.common.schemas import Name, Position


# ========== Structured content ==========
class NoteBlockMetadata(BaseModel):
    level: Optional[int] = Field(None, ge=1, le=6)  # headings only
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None


class NoteChecklistItem(BaseModel):
    id: str
    text: str
    completed: bool = False


class NoteBlock(BaseModel):
    id: str
    type: Literal["text", "checklist", "heading"]
    content: Optional[str] = None
    metadata: Optional[NoteBlockMetadata] = None
    items: Optional[List[NoteChecklistItem]] = None
    children: Optional[List["NoteBlock"]] = None


NoteBlock.model_rebuild()


class NoteContent(BaseModel):
    blocks: List[NoteBlock] = []

    def dumps(self) -> str:
        """Serialize for storage."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def loads(cls, raw: Optional[str]) -> "NoteContent":
        """Parse stored content; unreadable content becomes an empty document."""
        if not raw:
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValueError:
            return cls()


# ========== Notes ==========
class NoteCreate(BaseModel):
    title: Name
    content: NoteContent = Field(default_factory=NoteContent)
    folder_uid: Optional[uuid.UUID] = None
    position: Optional[Position] = None


class NoteUpdate(BaseModel):
    """Full update of title and content.

    The folder is left alone; an omitted position keeps the stored one.
    """

    title: Name
    content: NoteContent = Field(default_factory=NoteContent)
    position: Optional[Position] = None


class NotePatch(BaseModel):
    title: Optional[Name] = None
    content: Optional[NoteContent] = None
    folder_uid: Optional[uuid.UUID] = None
    position: Optional[Position] = None


class MoveNoteRequest(BaseModel):
    """``folder_uid`` null moves the note to the project root."""

    folder_uid: Optional[uuid.UUID] = None


class NoteResponse(BaseModel):
    note_uid: uuid.UUID
    project_uid: uuid.UUID
    title: str
    content: NoteContent
    folder_uid: Optional[uuid.UUID] = None
    position: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class NotesResponse(BaseModel):
    notes: List[NoteResponse]
    total: int


# ========== Folders ==========
class FolderCreate(BaseModel):
    name: Name
    parent_folder_uid: Optional[uuid.UUID] = None
    position: Optional[Position] = None


class FolderPatch(BaseModel):
    name: Optional[Name] = None
    parent_folder_uid: Optional[uuid.UUID] = None
    position: Optional[Position] = None


class FolderResponse(BaseModel):
    folder_uid: uuid.UUID
    project_uid: uuid.UUID
    parent_folder_uid: Optional[uuid.UUID] = None
    name: str
    position: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class FoldersResponse(BaseModel):
    folders: List[FolderResponse]
    total: int
