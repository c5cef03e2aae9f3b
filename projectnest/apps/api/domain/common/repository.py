"""Shared repository plumbing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AppException, DatabaseError
from core.logging import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """Holds the request session and commits units of work."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(
        self, operation: str, on_conflict: Optional[AppException] = None
    ) -> None:
        """Commit the pending unit of work, rolling back on failure.

        A unique-constraint violation raises ``on_conflict`` when one is given.
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if on_conflict is None:
                logger.error("Database commit failed", operation=operation, error=str(e))
                raise DatabaseError(operation, str(e)) from e
            logger.warning("Commit hit a unique constraint", operation=operation)
            raise on_conflict from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database commit failed", operation=operation, error=str(e))
            raise DatabaseError(operation, str(e)) from e
