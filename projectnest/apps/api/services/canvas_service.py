"""Canvas service."""

import json
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from core.access import ProjectAccess
from core.exceptions import BadRequestError, CanvasNotFoundError
from core.logging import LoggerMixin
from domain.canvas.models import Canvas, default_canvas_state
from domain.canvas.repository import CanvasRepository
from domain.canvas.schemas import CanvasRequest, CanvasResponse
from domain.project.models import Project
from domain.user.models import User


def _to_response(canvas: Canvas, project: Project) -> CanvasResponse:
    return CanvasResponse(
        canvas_uid=canvas.canvas_uid,
        project_uid=project.project_uid,
        state_json=canvas.state_json,
        created_at=canvas.created_at,
        updated_at=canvas.updated_at,
    )


class CanvasService(LoggerMixin):
    """Brainstorm canvas attached to each project."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.canvases = CanvasRepository(session)
        self.access = ProjectAccess(session)

    async def get_canvas(self, project_uid: uuid.UUID, user: User) -> CanvasResponse:
        """Return the project's canvas, creating an empty one on first read."""
        project = await self.access.require_member(project_uid, user)
        canvas = await self.canvases.get_by_project(project.id)
        if canvas is None:
            canvas = await self.canvases.create(
                Canvas(
                    project_id=project.id,
                    state_json=default_canvas_state(),
                    created_by=user.id,
                )
            )
            self.log_info("Created default canvas", project_uid=str(project_uid))
        return _to_response(canvas, project)

    async def update_canvas(
        self, project_uid: uuid.UUID, request: CanvasRequest, user: User
    ) -> CanvasResponse:
        project = await self.access.require_member(project_uid, user)

        try:
            json.loads(request.state_json)
        except ValueError:
            raise BadRequestError("Invalid JSON in state_json")

        canvas = await self.canvases.get_by_project(project.id)
        if canvas is None:
            canvas = await self.canvases.create(
                Canvas(
                    project_id=project.id,
                    state_json=request.state_json,
                    created_by=user.id,
                )
            )
        else:
            canvas = await self.canvases.update_state(canvas, request.state_json, user.id)
        return _to_response(canvas, project)

    async def delete_canvas(self, project_uid: uuid.UUID, user: User) -> None:
        project = await self.access.require_member(project_uid, user)
        if not await self.canvases.delete_by_project(project.id):
            raise CanvasNotFoundError(project_uid)
