"""Task endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.board.schemas import (
    MoveTaskRequest,
    TaskCreate,
    TaskPatch,
    TaskResponse,
    TaskUpdate,
)
from domain.user.models import User
from services.task_service import TaskService

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: TaskCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await TaskService(session).create_task(request, current_user)


@router.put("/{task_uid}", response_model=TaskResponse)
async def update_task(
    task_uid: UUID,
    request: TaskUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await TaskService(session).update_task(task_uid, request, current_user)


@router.patch("/{task_uid}", response_model=TaskResponse)
async def partial_update_task(
    task_uid: UUID,
    request: TaskPatch,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await TaskService(session).partial_update_task(task_uid, request, current_user)


@router.post("/{task_uid}/move", response_model=TaskResponse)
async def move_task(
    task_uid: UUID,
    request: MoveTaskRequest,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Move a task to another list; its position is kept."""
    return await TaskService(session).move_task(task_uid, request, current_user)


@router.delete("/{task_uid}")
async def delete_task(
    task_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await TaskService(session).delete_task(task_uid, current_user)
    return {"message": "Task deleted successfully"}
