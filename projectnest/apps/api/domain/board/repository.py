"""List and task repository implementations."""

import uuid
from datetime import datetime
from typing import Any, List, Optional, Sequence

from sqlalchemy import select, update

from core.logging import get_logger
from core.partial_update import execute_update
from domain.common.positions import ONE_BASED, display_order, next_position
from domain.common.repository import BaseRepository

from .models import Task, TaskList

logger = get_logger(__name__)


class ListRepository(BaseRepository):
    """Repository for task lists."""

    async def get_by_uid(
        self, list_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[TaskList]:
        query = select(TaskList).where(TaskList.list_uid == list_uid)
        if not include_inactive:
            query = query.where(TaskList.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, list_id: int) -> Optional[TaskList]:
        result = await self.session.execute(
            select(TaskList).where(TaskList.id == list_id, TaskList.is_active == True)  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: int) -> List[TaskList]:
        query = (
            select(TaskList)
            .where(TaskList.project_id == project_id, TaskList.is_active == True)  # noqa: E712
            .order_by(*display_order(TaskList.position, TaskList.created_at, TaskList.id))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def next_position(self, project_id: int) -> int:
        """Lists are numbered from 1 within their project."""
        return await next_position(
            self.session,
            TaskList.position,
            TaskList.project_id == project_id,
            TaskList.is_active == True,  # noqa: E712
            base=ONE_BASED,
        )

    async def create(self, task_list: TaskList) -> TaskList:
        self.session.add(task_list)
        await self.commit("create list")
        await self.session.refresh(task_list)
        logger.info(
            "Created list",
            list_uid=str(task_list.list_uid),
            position=task_list.position,
        )
        return task_list

    async def update_fields(
        self, list_uid: uuid.UUID, values: dict[str, Any]
    ) -> Optional[TaskList]:
        updated = await execute_update(
            self.session,
            TaskList,
            TaskList.list_uid == list_uid,
            TaskList.is_active == True,  # noqa: E712
            values=values,
        )
        if not updated:
            return None
        await self.commit("update list")
        return await self.get_by_uid(list_uid)

    async def soft_delete(self, list_uid: uuid.UUID, acting_user_id: int) -> bool:
        result = await self.session.execute(
            update(TaskList)
            .where(TaskList.list_uid == list_uid, TaskList.is_active == True)  # noqa: E712
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete list")
        logger.info("Soft deleted list", list_uid=str(list_uid))
        return True


class TaskRepository(BaseRepository):
    """Repository for tasks."""

    async def get_by_uid(
        self, task_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[Task]:
        query = select(Task).where(Task.task_uid == task_uid)
        if not include_inactive:
            query = query.where(Task.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_lists(self, list_ids: Sequence[int]) -> List[Task]:
        if not list_ids:
            return []
        query = (
            select(Task)
            .where(Task.list_id.in_(list_ids), Task.is_active == True)  # noqa: E712
            .order_by(*display_order(Task.position, Task.created_at, Task.id))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def next_position(self, list_id: int) -> int:
        """Tasks are numbered from 1 within their list."""
        return await next_position(
            self.session,
            Task.position,
            Task.list_id == list_id,
            Task.is_active == True,  # noqa: E712
            base=ONE_BASED,
        )

    async def create(self, task: Task) -> Task:
        self.session.add(task)
        await self.commit("create task")
        await self.session.refresh(task)
        logger.info("Created task", task_uid=str(task.task_uid), position=task.position)
        return task

    async def update_fields(
        self, task_uid: uuid.UUID, values: dict[str, Any]
    ) -> Optional[Task]:
        updated = await execute_update(
            self.session,
            Task,
            Task.task_uid == task_uid,
            Task.is_active == True,  # noqa: E712
            values=values,
        )
        if not updated:
            return None
        await self.commit("update task")
        return await self.get_by_uid(task_uid)

    async def move(
        self, task_uid: uuid.UUID, list_id: int, acting_user_id: int
    ) -> Optional[Task]:
        """Re-parent a task; its position is left as is."""
        return await self.update_fields(
            task_uid,
            {
                "list_id": list_id,
                "updated_at": datetime.utcnow(),
                "updated_by": acting_user_id,
            },
        )

    async def soft_delete(self, task_uid: uuid.UUID, acting_user_id: int) -> bool:
        result = await self.session.execute(
            update(Task)
            .where(Task.task_uid == task_uid, Task.is_active == True)  # noqa: E712
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete task")
        logger.info("Soft deleted task", task_uid=str(task_uid))
        return True
