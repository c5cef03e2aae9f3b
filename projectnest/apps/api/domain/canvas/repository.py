"""Canvas repository implementation."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select

from core.logging import get_logger
from domain.common.repository import BaseRepository

from .models import Canvas

logger = get_logger(__name__)


class CanvasRepository(BaseRepository):
    """Repository for project canvases."""

    async def get_by_project(self, project_id: int) -> Optional[Canvas]:
        result = await self.session.execute(
            select(Canvas).where(Canvas.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def create(self, canvas: Canvas) -> Canvas:
        self.session.add(canvas)
        await self.commit("create canvas")
        await self.session.refresh(canvas)
        logger.info("Created canvas", canvas_uid=str(canvas.canvas_uid))
        return canvas

    async def update_state(
        self, canvas: Canvas, state_json: str, acting_user_id: int
    ) -> Canvas:
        canvas.state_json = state_json
        canvas.updated_at = datetime.utcnow()
        canvas.updated_by = acting_user_id
        await self.commit("update canvas")
        await self.session.refresh(canvas)
        return canvas

    async def delete_by_project(self, project_id: int) -> bool:
        """Hard delete."""
        result = await self.session.execute(
            delete(Canvas).where(Canvas.project_id == project_id)
        )
        if not result.rowcount:
            return False
        await self.commit("delete canvas")
        logger.info("Deleted canvas", project_id=project_id)
        return True
