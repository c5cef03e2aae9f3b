"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.user.models import User
from domain.user.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    session: AsyncSession = Depends(get_session),
):
    """Register a new user and return a session token."""
    return await AuthService(session).register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_session),
):
    """Exchange email and password for a session token."""
    return await AuthService(session).login(request)


@router.get("/me", response_model=UserResponse)
async def me(
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await AuthService(session).get_user_by_uid(current_user.user_uid)
