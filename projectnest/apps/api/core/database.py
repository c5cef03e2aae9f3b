"""Database configuration and session management."""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config import get_settings
from core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

# SQLite doesn't support pool_size/max_overflow
_is_sqlite = "sqlite" in settings.database_url.lower()

if _is_sqlite:
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


def import_models() -> None:
    """Import all model modules so they register with Base.metadata."""
    from domain.board import models as board_models  # noqa: F401
    from domain.canvas import models as canvas_models  # noqa: F401
    from domain.chat import models as chat_models  # noqa: F401
    from domain.note import models as note_models  # noqa: F401
    from domain.project import models as project_models  # noqa: F401
    from domain.settings import models as settings_models  # noqa: F401
    from domain.user import models as user_models  # noqa: F401


async def init_database() -> None:
    """Create tables that do not exist yet."""
    import_models()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
