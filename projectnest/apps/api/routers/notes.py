"""Note and folder endpoints addressed by their own ids."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.note.schemas import (
    FolderPatch,
    FolderResponse,
    MoveNoteRequest,
    NotePatch,
    NoteResponse,
    NoteUpdate,
)
from domain.user.models import User
from services.note_service import NoteFolderService, NoteService

router = APIRouter()
folders_router = APIRouter()


@router.get("/{note_uid}", response_model=NoteResponse)
async def get_note(
    note_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).get_note(note_uid, current_user)


@router.put("/{note_uid}", response_model=NoteResponse)
async def update_note(
    note_uid: UUID,
    request: NoteUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).update_note(note_uid, request, current_user)


@router.patch("/{note_uid}", response_model=NoteResponse)
async def partial_update_note(
    note_uid: UUID,
    request: NotePatch,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).partial_update_note(note_uid, request, current_user)


@router.post("/{note_uid}/move-to-folder", response_model=NoteResponse)
async def move_note_to_folder(
    note_uid: UUID,
    request: MoveNoteRequest,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).move_note_to_folder(note_uid, request, current_user)


@router.delete("/{note_uid}")
async def delete_note(
    note_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await NoteService(session).delete_note(note_uid, current_user)
    return {"message": "Note deleted successfully"}


# ========== Folders ==========
@folders_router.put("/{folder_uid}", response_model=FolderResponse)
@folders_router.patch("/{folder_uid}", response_model=FolderResponse)
async def update_folder(
    folder_uid: UUID,
    request: FolderPatch,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteFolderService(session).update_folder(folder_uid, request, current_user)


@folders_router.delete("/{folder_uid}")
async def delete_folder(
    folder_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await NoteFolderService(session).delete_folder(folder_uid, current_user)
    return {"message": "Folder deleted successfully"}
