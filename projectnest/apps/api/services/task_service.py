"""Task aggregate service."""

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.access import ProjectAccess
from core.exceptions import ListNotFoundError, TaskNotFoundError
from core.logging import LoggerMixin
from core.partial_update import UpdateBuilder, present_fields
from domain.board.models import Task, TaskStatus
from domain.board.repository import ListRepository, TaskRepository
from domain.board.schemas import (
    MoveTaskRequest,
    TaskCreate,
    TaskPatch,
    TaskResponse,
    TaskUpdate,
)
from domain.common.schemas import DEFAULT_COLOR
from domain.user.models import User

TASK_COLUMNS = (
    "title",
    "description",
    "priority",
    "status",
    "color",
    "position",
    "is_completed",
    "due_date",
)
TASK_NULLABLE = ("description", "priority", "position", "due_date")


def completed_at_for(fields: dict[str, Any], now: datetime) -> tuple[bool, Optional[datetime]]:
    """Resolve ``completed_at`` from the completion triggers present in ``fields``.

    Returns ``(triggered, completed_at)``. ``status`` is applied first and
    ``is_completed`` second, so when both are present ``is_completed`` wins.
    """
    triggered = False
    completed_at = None
    status = fields.get("status")
    if status is not None:
        triggered = True
        completed_at = now if status == TaskStatus.completed else None
    if fields.get("is_completed") is not None:
        triggered = True
        completed_at = now if fields["is_completed"] else None
    return triggered, completed_at


class TaskService(LoggerMixin):
    """Tasks inside lists."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.lists = ListRepository(session)
        self.tasks = TaskRepository(session)
        self.access = ProjectAccess(session)

    async def _get_authorized(self, task_uid: uuid.UUID, user: User) -> Task:
        task = await self.tasks.get_by_uid(task_uid)
        if task is None:
            raise TaskNotFoundError(task_uid)
        task_list = await self.lists.get_by_id(task.list_id)
        if task_list is None:
            raise TaskNotFoundError(task_uid)
        await self.access.require_member_by_id(task_list.project_id, user)
        return task

    async def create_task(self, request: TaskCreate, user: User) -> TaskResponse:
        task_list = await self.lists.get_by_uid(request.list_uid)
        if task_list is None:
            raise ListNotFoundError(request.list_uid)
        await self.access.require_member_by_id(task_list.project_id, user)

        position = request.position
        if position is None:
            position = await self.tasks.next_position(task_list.id)

        _, completed_at = completed_at_for(
            {"status": request.status, "is_completed": request.is_completed},
            datetime.utcnow(),
        )
        task = Task(
            list_id=task_list.id,
            title=request.title,
            description=request.description,
            priority=request.priority.value if request.priority else None,
            status=request.status.value,
            color=request.color or DEFAULT_COLOR,
            position=position,
            is_completed=bool(request.is_completed),
            due_date=request.due_date,
            completed_at=completed_at,
            created_by=user.id,
        )
        task = await self.tasks.create(task)
        return TaskResponse.model_validate(task)

    async def update_task(
        self, task_uid: uuid.UUID, request: TaskUpdate, user: User
    ) -> TaskResponse:
        """Replace every mutable field."""
        fields = request.model_dump()
        fields["color"] = fields["color"] or DEFAULT_COLOR
        fields["is_completed"] = bool(fields["is_completed"])
        return await self._apply_update(task_uid, fields, user)

    async def partial_update_task(
        self, task_uid: uuid.UUID, request: TaskPatch, user: User
    ) -> TaskResponse:
        return await self._apply_update(task_uid, present_fields(request), user)

    async def _apply_update(
        self, task_uid: uuid.UUID, fields: dict[str, Any], user: User
    ) -> TaskResponse:
        await self._get_authorized(task_uid, user)

        now = datetime.utcnow()
        builder = UpdateBuilder("task", nullable=TASK_NULLABLE).apply(fields, TASK_COLUMNS)
        triggered, completed_at = completed_at_for(fields, now)
        if triggered:
            builder.set_side_field("completed_at", completed_at)

        task = await self.tasks.update_fields(
            task_uid, builder.build(acting_user_id=user.id, now=now)
        )
        if task is None:
            raise TaskNotFoundError(task_uid)
        return TaskResponse.model_validate(task)

    async def move_task(
        self, task_uid: uuid.UUID, request: MoveTaskRequest, user: User
    ) -> TaskResponse:
        """Re-parent a task under another list, keeping its position."""
        await self._get_authorized(task_uid, user)

        target = await self.lists.get_by_uid(request.list_uid)
        if target is None:
            raise ListNotFoundError(request.list_uid)
        await self.access.require_member_by_id(target.project_id, user)

        task = await self.tasks.move(task_uid, target.id, user.id)
        if task is None:
            raise TaskNotFoundError(task_uid)
        self.log_info(
            "Moved task", task_uid=str(task_uid), list_uid=str(request.list_uid)
        )
        return TaskResponse.model_validate(task)

    async def delete_task(self, task_uid: uuid.UUID, user: User) -> None:
        await self._get_authorized(task_uid, user)
        if not await self.tasks.soft_delete(task_uid, user.id):
            raise TaskNotFoundError(task_uid)
