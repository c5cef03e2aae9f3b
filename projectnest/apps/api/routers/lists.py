"""List endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.board.schemas import (
    ListCreate,
    ListPatch,
    ListPositionUpdate,
    ListResponse,
    ListUpdate,
)
from domain.user.models import User
from services.list_service import ListService

router = APIRouter()


@router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    request: ListCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ListService(session).create_list(request, current_user)


@router.put("/{list_uid}", response_model=ListResponse)
async def update_list(
    list_uid: UUID,
    request: ListUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ListService(session).update_list(list_uid, request, current_user)


@router.patch("/{list_uid}", response_model=ListResponse)
async def partial_update_list(
    list_uid: UUID,
    request: ListPatch,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ListService(session).partial_update_list(list_uid, request, current_user)


@router.put("/{list_uid}/position", response_model=ListResponse)
async def update_list_position(
    list_uid: UUID,
    request: ListPositionUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ListService(session).update_list_position(list_uid, request, current_user)


@router.delete("/{list_uid}")
async def delete_list(
    list_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await ListService(session).delete_list(list_uid, current_user)
    return {"message": "List deleted successfully"}
