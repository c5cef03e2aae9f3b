"""User settings schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.settings.models import MAX_AUTO_SAVE_INTERVAL, MIN_AUTO_SAVE_INTERVAL


class UserSettingsUpdate(BaseModel):
    """Any subset of settings; absent fields keep their stored value."""

    theme: Optional[str] = Field(None, min_length=1, max_length=100)
    language: Optional[str] = Field(None, min_length=2, max_length=2)
    timezone: Optional[str] = Field(None, min_length=1, max_length=100)
    notifications_enabled: Optional[bool] = None
    email_notifications: Optional[bool] = None
    sound_enabled: Optional[bool] = None
    compact_mode: Optional[bool] = None
    auto_save: Optional[bool] = None
    auto_save_interval: Optional[int] = Field(
        None, ge=MIN_AUTO_SAVE_INTERVAL, le=MAX_AUTO_SAVE_INTERVAL
    )


class UserSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    settings_uid: uuid.UUID
    theme: str
    language: str
    timezone: str
    notifications_enabled: bool
    email_notifications: bool
    sound_enabled: bool
    compact_mode: bool
    auto_save: bool
    auto_save_interval: int
    created_at: datetime
    updated_at: datetime
