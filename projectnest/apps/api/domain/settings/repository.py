"""User settings repository implementation."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, select

from core.logging import get_logger
from core.partial_update import execute_update
from domain.common.repository import BaseRepository

from .models import DEFAULT_SETTINGS, UserSettings

logger = get_logger(__name__)


class UserSettingsRepository(BaseRepository):
    """Repository for user settings."""

    async def get_by_user(self, user_id: int) -> Optional[UserSettings]:
        result = await self.session.execute(
            select(UserSettings)
            .where(UserSettings.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_defaults(self, user_id: int, **overrides: Any) -> UserSettings:
        now = datetime.utcnow()
        values = {**DEFAULT_SETTINGS, **overrides}
        settings = UserSettings(user_id=user_id, created_at=now, updated_at=now, **values)
        self.session.add(settings)
        await self.commit("create user settings")
        await self.session.refresh(settings)
        logger.info("Initialized user settings", user_id=user_id)
        return settings

    async def update_fields(
        self, user_id: int, values: dict[str, Any]
    ) -> Optional[UserSettings]:
        updated = await execute_update(
            self.session, UserSettings, UserSettings.user_id == user_id, values=values
        )
        if not updated:
            return None
        await self.commit("update user settings")
        return await self.get_by_user(user_id)

    async def delete_by_user(self, user_id: int) -> bool:
        result = await self.session.execute(
            delete(UserSettings).where(UserSettings.user_id == user_id)
        )
        await self.commit("delete user settings")
        return bool(result.rowcount)
