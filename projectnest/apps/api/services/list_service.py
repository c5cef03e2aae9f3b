"""List aggregate service."""

import uuid
from collections import defaultdict
from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from core.access import ProjectAccess
from core.exceptions import ListNotFoundError
from core.logging import LoggerMixin
from core.partial_update import UpdateBuilder, present_fields
from domain.board.models import TaskList
from domain.board.repository import ListRepository, TaskRepository
from domain.board.schemas import (
    ListCreate,
    ListPatch,
    ListPositionUpdate,
    ListResponse,
    ListUpdate,
    ListWithTasksResponse,
    TaskResponse,
)
from domain.common.schemas import DEFAULT_COLOR
from domain.project.models import Project
from domain.user.models import User

LIST_COLUMNS = ("name", "color", "position")


class ListService(LoggerMixin):
    """Ordered lists inside a project."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.lists = ListRepository(session)
        self.tasks = TaskRepository(session)
        self.access = ProjectAccess(session)

    async def _get_authorized(self, list_uid: uuid.UUID, user: User) -> TaskList:
        task_list = await self.lists.get_by_uid(list_uid)
        if task_list is None:
            raise ListNotFoundError(list_uid)
        await self.access.require_member_by_id(task_list.project_id, user)
        return task_list

    async def get_lists_with_tasks(self, project: Project) -> List[ListWithTasksResponse]:
        """Active lists of an already authorized project, each with its active tasks."""
        lists = await self.lists.list_by_project(project.id)
        tasks = await self.tasks.list_by_lists([lst.id for lst in lists])

        tasks_by_list: dict[int, list] = defaultdict(list)
        for task in tasks:
            tasks_by_list[task.list_id].append(TaskResponse.model_validate(task))

        return [
            ListWithTasksResponse(
                **ListResponse.model_validate(lst).model_dump(),
                tasks=tasks_by_list[lst.id],
            )
            for lst in lists
        ]

    async def create_list(self, request: ListCreate, user: User) -> ListResponse:
        project = await self.access.require_member(request.project_uid, user)

        position = request.position
        if position is None:
            position = await self.lists.next_position(project.id)

        task_list = TaskList(
            project_id=project.id,
            name=request.name,
            color=request.color or DEFAULT_COLOR,
            position=position,
            created_by=user.id,
        )
        task_list = await self.lists.create(task_list)
        return ListResponse.model_validate(task_list)

    async def update_list(
        self, list_uid: uuid.UUID, request: ListUpdate, user: User
    ) -> ListResponse:
        """Full update: name and color."""
        fields = {"name": request.name, "color": request.color or DEFAULT_COLOR}
        return await self._apply_update(list_uid, fields, user)

    async def partial_update_list(
        self, list_uid: uuid.UUID, request: ListPatch, user: User
    ) -> ListResponse:
        return await self._apply_update(list_uid, present_fields(request), user)

    async def update_list_position(
        self, list_uid: uuid.UUID, request: ListPositionUpdate, user: User
    ) -> ListResponse:
        """Store the given position as is; siblings are not renumbered."""
        return await self._apply_update(list_uid, {"position": request.position}, user)

    async def _apply_update(
        self, list_uid: uuid.UUID, fields: dict[str, Any], user: User
    ) -> ListResponse:
        await self._get_authorized(list_uid, user)
        values = (
            UpdateBuilder("list")
            .apply(fields, LIST_COLUMNS)
            .build(acting_user_id=user.id)
        )
        task_list = await self.lists.update_fields(list_uid, values)
        if task_list is None:
            raise ListNotFoundError(list_uid)
        return ListResponse.model_validate(task_list)

    async def delete_list(self, list_uid: uuid.UUID, user: User) -> None:
        """Soft delete; the list's tasks are left untouched."""
        await self._get_authorized(list_uid, user)
        if not await self.lists.soft_delete(list_uid, user.id):
            raise ListNotFoundError(list_uid)
        self.log_info("Deleted list", list_uid=str(list_uid))
