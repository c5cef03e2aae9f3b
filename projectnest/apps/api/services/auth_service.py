"""Registration and login."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from config import get_settings
from core.auth import create_access_token, hash_password, verify_password
from core.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from core.logging import LoggerMixin
from domain.user.models import User
from domain.user.repository import UserRepository
from domain.user.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse

settings = get_settings()


class AuthService(LoggerMixin):
    """Credential checks and session token issuance."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            user=UserResponse.model_validate(user),
            token=create_access_token(user),
            expires_in=settings.jwt_expire_hours * 3600,
        )

    async def register(self, request: RegisterRequest) -> AuthResponse:
        if await self.users.get_by_email(request.email) is not None:
            raise DuplicateResourceError("User", "email", request.email)

        user = await self.users.create(
            User(
                email=request.email.lower(),
                name=request.name,
                password_hash=hash_password(request.password),
            )
        )
        self.log_info("User registered", user_uid=str(user.user_uid))
        return self._auth_response(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        user = await self.users.get_by_email(request.email)
        # Same error for unknown email and wrong password
        if (
            user is None
            or not user.is_active
            or not verify_password(request.password, user.password_hash)
        ):
            self.log_warning("Login failed", email=request.email)
            raise InvalidCredentialsError()

        self.log_info("User logged in", user_uid=str(user.user_uid))
        return self._auth_response(user)

    async def get_user_by_uid(self, user_uid: uuid.UUID) -> UserResponse:
        user = await self.users.get_by_uid(user_uid)
        if user is None:
            raise UserNotFoundError(user_uid)
        return UserResponse.model_validate(user)
