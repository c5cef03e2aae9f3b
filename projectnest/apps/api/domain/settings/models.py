"""User settings models."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid

from core.database import Base

DEFAULT_THEME = "projectnest-default"
VALID_THEMES = ("projectnest-default", "projectnest-dark", "solarized-light")
VALID_LANGUAGES = ("en", "es", "fr", "de", "it", "pt", "ru", "ja", "ko", "zh")
MIN_AUTO_SAVE_INTERVAL = 10
MAX_AUTO_SAVE_INTERVAL = 600

DEFAULT_SETTINGS = {
    "theme": DEFAULT_THEME,
    "language": "en",
    "timezone": "UTC",
    "notifications_enabled": True,
    "email_notifications": True,
    "sound_enabled": True,
    "compact_mode": False,
    "auto_save": True,
    "auto_save_interval": 30,
}


class UserSettings(Base):
    """Per-user preferences."""

    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    settings_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    theme = Column(String(100), nullable=False, default=DEFAULT_THEME)
    language = Column(String(10), nullable=False, default="en")
    timezone = Column(String(100), nullable=False, default="UTC")
    notifications_enabled = Column(Boolean, nullable=False, default=True)
    email_notifications = Column(Boolean, nullable=False, default=True)
    sound_enabled = Column(Boolean, nullable=False, default=True)
    compact_mode = Column(Boolean, nullable=False, default=False)
    auto_save = Column(Boolean, nullable=False, default=True)
    auto_save_interval = Column(Integer, nullable=False, default=30)

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
