"""User settings endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.settings.schemas import UserSettingsResponse, UserSettingsUpdate
from domain.user.models import User
from services.settings_service import UserSettingsService

router = APIRouter()


@router.get("", response_model=UserSettingsResponse)
async def get_settings(
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await UserSettingsService(session).get_user_settings(current_user)


@router.put("", response_model=UserSettingsResponse)
@router.patch("", response_model=UserSettingsResponse)
async def update_settings(
    request: UserSettingsUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await UserSettingsService(session).update_user_settings(current_user, request)


@router.post("/reset", response_model=UserSettingsResponse)
async def reset_settings(
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Discard the user's settings and restore the defaults."""
    return await UserSettingsService(session).reset_user_settings(current_user)
