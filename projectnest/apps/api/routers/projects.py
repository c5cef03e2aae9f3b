"""Project endpoints, including the resources nested under a project."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.canvas.schemas import CanvasRequest, CanvasResponse
from domain.chat.schemas import ConversationCreate, ConversationResponse
from domain.note.schemas import (
    FolderCreate,
    FolderResponse,
    FoldersResponse,
    NoteCreate,
    NoteResponse,
    NotesResponse,
)
from domain.project.schemas import (
    AddMemberRequest,
    ProjectCreate,
    ProjectMemberResponse,
    ProjectPatch,
    ProjectProgress,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithListsResponse,
    ProjectWithProgressResponse,
)
from domain.user.models import User
from services.canvas_service import CanvasService
from services.chat_service import ChatService
from services.note_service import NoteFolderService, NoteService
from services.project_service import ProjectService

router = APIRouter()


@router.get("", response_model=List[ProjectWithProgressResponse])
async def list_projects(
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Projects the user is a member of, with task statistics."""
    return await ProjectService(session).get_projects_with_progress(current_user)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).create_project(request, current_user)


@router.get("/{project_uid}", response_model=ProjectWithListsResponse)
async def get_project(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Project with its lists and their tasks."""
    return await ProjectService(session).get_project_with_lists(project_uid, current_user)


@router.put("/{project_uid}", response_model=ProjectResponse)
async def update_project(
    project_uid: UUID,
    request: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).update_project(project_uid, request, current_user)


@router.patch("/{project_uid}", response_model=ProjectResponse)
async def partial_update_project(
    project_uid: UUID,
    request: ProjectPatch,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).partial_update_project(
        project_uid, request, current_user
    )


@router.delete("/{project_uid}")
async def delete_project(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await ProjectService(session).delete_project(project_uid, current_user)
    return {"message": "Project deleted successfully"}


@router.get("/{project_uid}/progress", response_model=ProjectProgress)
async def get_project_progress(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).get_project_progress(project_uid, current_user)


# ========== Members ==========
@router.get("/{project_uid}/members", response_model=List[ProjectMemberResponse])
async def get_project_members(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).get_project_members(project_uid, current_user)


@router.post(
    "/{project_uid}/members",
    response_model=ProjectMemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_project_member(
    project_uid: UUID,
    request: AddMemberRequest,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ProjectService(session).add_member_by_email(
        project_uid, request, current_user
    )


# ========== Canvas ==========
@router.get("/{project_uid}/canvas", response_model=CanvasResponse)
async def get_canvas(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await CanvasService(session).get_canvas(project_uid, current_user)


@router.post("/{project_uid}/canvas", response_model=CanvasResponse)
@router.put("/{project_uid}/canvas", response_model=CanvasResponse)
async def update_canvas(
    project_uid: UUID,
    request: CanvasRequest,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await CanvasService(session).update_canvas(project_uid, request, current_user)


@router.delete("/{project_uid}/canvas")
async def delete_canvas(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await CanvasService(session).delete_canvas(project_uid, current_user)
    return {"message": "Canvas deleted successfully"}


# ========== Notes & folders ==========
@router.get("/{project_uid}/notes", response_model=NotesResponse)
async def get_notes(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).get_notes(project_uid, current_user)


@router.post(
    "/{project_uid}/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED
)
async def create_note(
    project_uid: UUID,
    request: NoteCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteService(session).create_note(project_uid, request, current_user)


@router.get("/{project_uid}/folders", response_model=FoldersResponse)
async def get_folders(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteFolderService(session).get_folders(project_uid, current_user)


@router.post(
    "/{project_uid}/folders",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_folder(
    project_uid: UUID,
    request: FolderCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await NoteFolderService(session).create_folder(project_uid, request, current_user)


# ========== Chat ==========
@router.get("/{project_uid}/chat/conversations", response_model=List[ConversationResponse])
async def get_conversations(
    project_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ChatService(session).get_conversations(project_uid, current_user)


@router.post(
    "/{project_uid}/chat/conversations",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_conversation(
    project_uid: UUID,
    request: ConversationCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ChatService(session).create_conversation(project_uid, request, current_user)
