"""User repository implementation."""

import uuid
from typing import Optional

from sqlalchemy import func, select

from core.exceptions import DuplicateResourceError
from core.logging import get_logger
from domain.common.repository import BaseRepository

from .models import User

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """Repository for user accounts."""

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_uid(self, user_uid: uuid.UUID) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.user_uid == user_uid, User.is_active == True)  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.commit(
            "create user",
            on_conflict=DuplicateResourceError("User", "email", user.email),
        )
        await self.session.refresh(user)
        logger.info("Created user", user_uid=str(user.user_uid))
        return user
