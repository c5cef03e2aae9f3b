"""Note and note folder services."""

import uuid
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.access import ProjectAccess
from core.exceptions import (
    BadRequestError,
    FolderNotFoundError,
    NoteNotFoundError,
    ValidationError,
)
from core.logging import LoggerMixin
from core.partial_update import UpdateBuilder, present_fields
from domain.note.models import Note, NoteFolder
from domain.note.repository import FolderRepository, NoteRepository
from domain.note.schemas import (
    FolderCreate,
    FolderPatch,
    FolderResponse,
    FoldersResponse,
    MoveNoteRequest,
    NoteContent,
    NoteCreate,
    NotePatch,
    NoteResponse,
    NotesResponse,
    NoteUpdate,
)
from domain.project.models import Project
from domain.user.models import User


class _FolderLookup:
    """Resolves folder external ids within one project."""

    def __init__(self, folders: FolderRepository):
        self.folders = folders

    async def resolve(
        self, project: Project, folder_uid: Optional[uuid.UUID], field: str
    ) -> Optional[int]:
        if folder_uid is None:
            return None
        folder = await self.folders.get_by_uid(folder_uid)
        if folder is None or folder.project_id != project.id:
            raise BadRequestError(
                "Folder does not exist in this project",
                details={"field": field, "folder_uid": str(folder_uid)},
            )
        return folder.id


class NoteService(LoggerMixin):
    """Block-structured notes in a project."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.notes = NoteRepository(session)
        self.folders = FolderRepository(session)
        self.folder_lookup = _FolderLookup(self.folders)
        self.access = ProjectAccess(session)

    async def _to_response(
        self,
        note: Note,
        project: Project,
        folder_uids: Optional[dict[int, uuid.UUID]] = None,
    ) -> NoteResponse:
        if folder_uids is None:
            folder_uids = await self.folders.uid_map(project.id)
        return NoteResponse(
            note_uid=note.note_uid,
            project_uid=project.project_uid,
            title=note.title,
            content=NoteContent.loads(note.content_json),
            folder_uid=folder_uids.get(note.folder_id) if note.folder_id else None,
            position=note.position,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    async def _get_authorized(self, note_uid: uuid.UUID, user: User) -> tuple[Note, Project]:
        note = await self.notes.get_by_uid(note_uid)
        if note is None:
            raise NoteNotFoundError(note_uid)
        project = await self.access.require_member_by_id(note.project_id, user)
        return note, project

    async def get_notes(self, project_uid: uuid.UUID, user: User) -> NotesResponse:
        project = await self.access.require_member(project_uid, user)
        notes = await self.notes.list_by_project(project.id)
        folder_uids = await self.folders.uid_map(project.id)
        responses = [await self._to_response(note, project, folder_uids) for note in notes]
        return NotesResponse(notes=responses, total=len(responses))

    async def get_note(self, note_uid: uuid.UUID, user: User) -> NoteResponse:
        note, project = await self._get_authorized(note_uid, user)
        return await self._to_response(note, project)

    async def create_note(
        self, project_uid: uuid.UUID, request: NoteCreate, user: User
    ) -> NoteResponse:
        project = await self.access.require_member(project_uid, user)
        folder_id = await self.folder_lookup.resolve(project, request.folder_uid, "folder_uid")

        position = request.position
        if position is None:
            position = await self.notes.next_position(project.id, folder_id)

        note = Note(
            project_id=project.id,
            folder_id=folder_id,
            title=request.title,
            content_json=request.content.dumps(),
            position=position,
            created_by=user.id,
        )
        note = await self.notes.create(note)
        return await self._to_response(note, project)

    async def update_note(
        self, note_uid: uuid.UUID, request: NoteUpdate, user: User
    ) -> NoteResponse:
        """Replace title and content; position only when sent."""
        fields: dict[str, Any] = {
            "title": request.title,
            "content": request.content.model_dump(),
        }
        if "position" in request.model_fields_set:
            fields["position"] = request.position
        return await self._apply_update(note_uid, fields, user)

    async def partial_update_note(
        self, note_uid: uuid.UUID, request: NotePatch, user: User
    ) -> NoteResponse:
        fields = present_fields(request)
        if "content" in fields and fields["content"] is not None:
            fields["content"] = fields["content"].model_dump()
        return await self._apply_update(note_uid, fields, user)

    async def move_note_to_folder(
        self, note_uid: uuid.UUID, request: MoveNoteRequest, user: User
    ) -> NoteResponse:
        """Move into a folder, or to the project root when ``folder_uid`` is null."""
        return await self._apply_update(note_uid, {"folder_uid": request.folder_uid}, user)

    async def _apply_update(
        self, note_uid: uuid.UUID, fields: dict[str, Any], user: User
    ) -> NoteResponse:
        _, project = await self._get_authorized(note_uid, user)

        builder = UpdateBuilder("note", nullable=("folder_id", "position"))
        if "title" in fields:
            builder.set("title", fields["title"])
        if "content" in fields:
            if fields["content"] is None:
                raise ValidationError("content", "cannot be null")
            builder.set("content_json", NoteContent.model_validate(fields["content"]).dumps())
        if "folder_uid" in fields:
            builder.set(
                "folder_id",
                await self.folder_lookup.resolve(project, fields["folder_uid"], "folder_uid"),
            )
        if "position" in fields:
            builder.set("position", fields["position"])

        note = await self.notes.update_fields(note_uid, builder.build(acting_user_id=user.id))
        if note is None:
            raise NoteNotFoundError(note_uid)
        return await self._to_response(note, project)

    async def delete_note(self, note_uid: uuid.UUID, user: User) -> None:
        await self._get_authorized(note_uid, user)
        if not await self.notes.soft_delete(note_uid, user.id):
            raise NoteNotFoundError(note_uid)


class NoteFolderService(LoggerMixin):
    """Folder tree for a project's notes."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.folders = FolderRepository(session)
        self.folder_lookup = _FolderLookup(self.folders)
        self.access = ProjectAccess(session)

    @staticmethod
    def _to_response(
        folder: NoteFolder, project: Project, folder_uids: dict[int, uuid.UUID]
    ) -> FolderResponse:
        return FolderResponse(
            folder_uid=folder.folder_uid,
            project_uid=project.project_uid,
            parent_folder_uid=(
                folder_uids.get(folder.parent_folder_id) if folder.parent_folder_id else None
            ),
            name=folder.name,
            position=folder.position,
            created_at=folder.created_at,
            updated_at=folder.updated_at,
        )

    async def get_folders(self, project_uid: uuid.UUID, user: User) -> FoldersResponse:
        project = await self.access.require_member(project_uid, user)
        folders = await self.folders.list_by_project(project.id)
        folder_uids = await self.folders.uid_map(project.id)
        return FoldersResponse(
            folders=[self._to_response(f, project, folder_uids) for f in folders],
            total=len(folders),
        )

    async def create_folder(
        self, project_uid: uuid.UUID, request: FolderCreate, user: User
    ) -> FolderResponse:
        project = await self.access.require_member(project_uid, user)
        parent_id = await self.folder_lookup.resolve(
            project, request.parent_folder_uid, "parent_folder_uid"
        )

        position = request.position
        if position is None:
            position = await self.folders.next_position(project.id, parent_id)

        folder = await self.folders.create(
            NoteFolder(
                project_id=project.id,
                parent_folder_id=parent_id,
                name=request.name,
                position=position,
                created_by=user.id,
            )
        )
        return self._to_response(folder, project, await self.folders.uid_map(project.id))

    async def update_folder(
        self, folder_uid: uuid.UUID, request: FolderPatch, user: User
    ) -> FolderResponse:
        folder = await self.folders.get_by_uid(folder_uid)
        if folder is None:
            raise FolderNotFoundError(folder_uid)
        project = await self.access.require_member_by_id(folder.project_id, user)

        fields = present_fields(request)
        builder = UpdateBuilder("folder", nullable=("parent_folder_id", "position"))
        if "name" in fields:
            builder.set("name", fields["name"])
        if "parent_folder_uid" in fields:
            parent_id = await self.folder_lookup.resolve(
                project, fields["parent_folder_uid"], "parent_folder_uid"
            )
            await self._check_not_descendant(folder, parent_id)
            builder.set("parent_folder_id", parent_id)
        if "position" in fields:
            builder.set("position", fields["position"])

        updated = await self.folders.update_fields(
            folder_uid, builder.build(acting_user_id=user.id)
        )
        if updated is None:
            raise FolderNotFoundError(folder_uid)
        return self._to_response(updated, project, await self.folders.uid_map(project.id))

    async def _check_not_descendant(self, folder: NoteFolder, parent_id: Optional[int]) -> None:
        """A folder cannot be moved under itself or one of its descendants."""
        parents = await self.folders.parent_ids(folder.project_id)
        current = parent_id
        while current is not None:
            if current == folder.id:
                raise BadRequestError("A folder cannot be moved into itself")
            current = parents.get(current)

    async def delete_folder(self, folder_uid: uuid.UUID, user: User) -> None:
        """Soft delete; notes keep their folder reference."""
        folder = await self.folders.get_by_uid(folder_uid)
        if folder is None:
            raise FolderNotFoundError(folder_uid)
        await self.access.require_member_by_id(folder.project_id, user)
        if not await self.folders.soft_delete(folder_uid, user.id):
            raise FolderNotFoundError(folder_uid)
