"""User settings service."""

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ValidationError
from core.logging import LoggerMixin
from core.partial_update import UpdateBuilder, present_fields
from domain.settings.models import VALID_LANGUAGES, VALID_THEMES
from domain.settings.repository import UserSettingsRepository
from domain.settings.schemas import UserSettingsResponse, UserSettingsUpdate
from domain.user.models import User

SETTINGS_COLUMNS = (
    "theme",
    "language",
    "timezone",
    "notifications_enabled",
    "email_notifications",
    "sound_enabled",
    "compact_mode",
    "auto_save",
    "auto_save_interval",
)


class UserSettingsService(LoggerMixin):
    """Per-user preferences with lazily created defaults."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.settings = UserSettingsRepository(session)

    async def get_user_settings(self, user: User) -> UserSettingsResponse:
        settings = await self.settings.get_by_user(user.id)
        if settings is None:
            settings = await self.settings.create_defaults(user.id)
        return UserSettingsResponse.model_validate(settings)

    async def update_user_settings(
        self, user: User, request: UserSettingsUpdate
    ) -> UserSettingsResponse:
        """Create-or-update with only the fields that were sent."""
        fields = present_fields(request)
        if fields.get("theme") is not None and fields["theme"] not in VALID_THEMES:
            raise ValidationError("theme", f"must be one of: {', '.join(VALID_THEMES)}")
        if fields.get("language") is not None and fields["language"] not in VALID_LANGUAGES:
            raise ValidationError(
                "language", f"must be one of: {', '.join(VALID_LANGUAGES)}"
            )

        values = UpdateBuilder("user settings").apply(fields, SETTINGS_COLUMNS).build()

        if await self.settings.get_by_user(user.id) is None:
            await self.settings.create_defaults(user.id)
        settings = await self.settings.update_fields(user.id, values)
        self.log_info("Updated user settings", user_id=user.id, fields=sorted(fields))
        return UserSettingsResponse.model_validate(settings)

    async def reset_user_settings(self, user: User) -> UserSettingsResponse:
        await self.settings.delete_by_user(user.id)
        settings = await self.settings.create_defaults(user.id)
        self.log_info("Reset user settings", user_id=user.id)
        return UserSettingsResponse.model_validate(settings)
