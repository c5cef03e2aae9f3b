"""Note and folder repository implementations."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select, update

from core.logging import get_logger
from core.partial_update import execute_update
from domain.common.positions import ZERO_BASED, display_order, next_position
from domain.common.repository import BaseRepository

from .models import Note, NoteFolder

logger = get_logger(__name__)


class NoteRepository(BaseRepository):
    """Repository for notes."""

    async def get_by_uid(
        self, note_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[Note]:
        query = select(Note).where(Note.note_uid == note_uid)
        if not include_inactive:
            query = query.where(Note.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: int) -> List[Note]:
        query = (
            select(Note)
            .where(Note.project_id == project_id, Note.is_active == True)  # noqa: E712
            .order_by(*display_order(Note.position, Note.created_at, Note.id))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def next_position(self, project_id: int, folder_id: Optional[int]) -> int:
        """Notes are numbered from 0 within their (project, folder) scope."""
        return await next_position(
            self.session,
            Note.position,
            Note.project_id == project_id,
            Note.folder_id.is_not_distinct_from(folder_id),
            Note.is_active == True,  # noqa: E712
            base=ZERO_BASED,
        )

    async def create(self, note: Note) -> Note:
        self.session.add(note)
        await self.commit("create note")
        await self.session.refresh(note)
        logger.info("Created note", note_uid=str(note.note_uid), position=note.position)
        return note

    async def update_fields(
        self, note_uid: uuid.UUID, values: dict[str, Any]
    ) -> Optional[Note]:
        updated = await execute_update(
            self.session,
            Note,
            Note.note_uid == note_uid,
            Note.is_active == True,  # noqa: E712
            values=values,
        )
        if not updated:
            return None
        await self.commit("update note")
        return await self.get_by_uid(note_uid)

    async def soft_delete(self, note_uid: uuid.UUID, acting_user_id: int) -> bool:
        result = await self.session.execute(
            update(Note)
            .where(Note.note_uid == note_uid, Note.is_active == True)  # noqa: E712
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete note")
        logger.info("Soft deleted note", note_uid=str(note_uid))
        return True


class FolderRepository(BaseRepository):
    """Repository for note folders."""

    async def get_by_uid(
        self, folder_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[NoteFolder]:
        query = select(NoteFolder).where(NoteFolder.folder_uid == folder_uid)
        if not include_inactive:
            query = query.where(NoteFolder.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: int) -> List[NoteFolder]:
        query = (
            select(NoteFolder)
            .where(
                NoteFolder.project_id == project_id,
                NoteFolder.is_active == True,  # noqa: E712
            )
            .order_by(
                *display_order(NoteFolder.position, NoteFolder.created_at, NoteFolder.id)
            )
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def uid_map(self, project_id: int) -> dict[int, uuid.UUID]:
        """Internal id to external id for every folder of a project."""
        result = await self.session.execute(
            select(NoteFolder.id, NoteFolder.folder_uid).where(
                NoteFolder.project_id == project_id
            )
        )
        return {folder_id: folder_uid for folder_id, folder_uid in result.all()}

    async def parent_ids(self, project_id: int) -> dict[int, Optional[int]]:
        """Folder id to parent folder id for the active folders of a project."""
        result = await self.session.execute(
            select(NoteFolder.id, NoteFolder.parent_folder_id).where(
                NoteFolder.project_id == project_id,
                NoteFolder.is_active == True,  # noqa: E712
            )
        )
        return {folder_id: parent_id for folder_id, parent_id in result.all()}

    async def next_position(self, project_id: int, parent_id: Optional[int]) -> int:
        """Folders are numbered from 0 within their (project, parent) scope."""
        return await next_position(
            self.session,
            NoteFolder.position,
            NoteFolder.project_id == project_id,
            NoteFolder.parent_folder_id.is_not_distinct_from(parent_id),
            NoteFolder.is_active == True,  # noqa: E712
            base=ZERO_BASED,
        )

    async def create(self, folder: NoteFolder) -> NoteFolder:
        self.session.add(folder)
        await self.commit("create folder")
        await self.session.refresh(folder)
        logger.info("Created folder", folder_uid=str(folder.folder_uid))
        return folder

    async def update_fields(
        self, folder_uid: uuid.UUID, values: dict[str, Any]
    ) -> Optional[NoteFolder]:
        updated = await execute_update(
            self.session,
            NoteFolder,
            NoteFolder.folder_uid == folder_uid,
            NoteFolder.is_active == True,  # noqa: E712
            values=values,
        )
        if not updated:
            return None
        await self.commit("update folder")
        return await self.get_by_uid(folder_uid)

    async def soft_delete(self, folder_uid: uuid.UUID, acting_user_id: int) -> bool:
        result = await self.session.execute(
            update(NoteFolder)
            .where(
                NoteFolder.folder_uid == folder_uid,
                NoteFolder.is_active == True,  # noqa: E712
            )
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete folder")
        logger.info("Soft deleted folder", folder_uid=str(folder_uid))
        return True
