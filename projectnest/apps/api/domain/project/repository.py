"""Project repository implementation."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import case, func, select, update

from core.exceptions import BadRequestError
from core.logging import get_logger
from core.partial_update import execute_update
from domain.board.models import Task, TaskList
from domain.common.positions import NULL_POSITION_SENTINEL
from domain.common.repository import BaseRepository
from domain.user.models import User

from .models import MemberRole, Project, ProjectMember

logger = get_logger(__name__)


class ProjectRepository(BaseRepository):
    """Repository for projects and their memberships."""

    async def get_by_uid(
        self, project_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[Project]:
        query = select(Project).where(Project.project_uid == project_uid)
        if not include_inactive:
            query = query.where(Project.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_member(self, user_id: int) -> List[Project]:
        """Active projects the user belongs to, in display order."""
        query = (
            select(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .where(
                ProjectMember.user_id == user_id,
                Project.is_active == True,  # noqa: E712
            )
            .order_by(
                func.coalesce(Project.position, NULL_POSITION_SENTINEL).asc(),
                Project.created_at.desc(),
                Project.id.desc(),
            )
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_with_owner(self, project: Project, owner_id: int) -> Project:
        """Insert the project and its owner membership in one transaction."""
        self.session.add(project)
        await self.session.flush()
        self.session.add(
            ProjectMember(
                project_id=project.id,
                user_id=owner_id,
                role=MemberRole.owner.value,
            )
        )
        await self.commit("create project")
        await self.session.refresh(project)
        logger.info(
            "Created project", project_uid=str(project.project_uid), owner_id=owner_id
        )
        return project

    async def update_fields(
        self, project_uid: uuid.UUID, values: dict[str, Any]
    ) -> Optional[Project]:
        """Apply column assignments to an active project and re-read it."""
        updated = await execute_update(
            self.session,
            Project,
            Project.project_uid == project_uid,
            Project.is_active == True,  # noqa: E712
            values=values,
        )
        if not updated:
            return None
        await self.commit("update project")
        return await self.get_by_uid(project_uid)

    async def soft_delete(self, project_uid: uuid.UUID, acting_user_id: int) -> bool:
        result = await self.session.execute(
            update(Project)
            .where(Project.project_uid == project_uid, Project.is_active == True)  # noqa: E712
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete project")
        logger.info("Soft deleted project", project_uid=str(project_uid))
        return True

    async def get_task_counts(self, project_id: int) -> tuple[int, int]:
        """Return ``(total, completed)`` over active tasks in active lists."""
        query = (
            select(
                func.count(Task.id),
                func.coalesce(
                    func.sum(case((Task.is_completed == True, 1), else_=0)), 0  # noqa: E712
                ),
            )
            .select_from(Task)
            .join(TaskList, TaskList.id == Task.list_id)
            .join(Project, Project.id == TaskList.project_id)
            .where(
                Project.id == project_id,
                Project.is_active == True,  # noqa: E712
                TaskList.is_active == True,  # noqa: E712
                Task.is_active == True,  # noqa: E712
            )
        )
        total, completed = (await self.session.execute(query)).one()
        return int(total or 0), int(completed or 0)

    # ========== Members ==========
    async def get_members(self, project_id: int) -> List[tuple[ProjectMember, User]]:
        query = (
            select(ProjectMember, User)
            .join(User, User.id == ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at.asc(), ProjectMember.id.asc())
        )
        result = await self.session.execute(query)
        return [(member, user) for member, user in result.all()]

    async def is_member(self, project_id: int, user_id: int) -> bool:
        result = await self.session.execute(
            select(ProjectMember.id).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.first() is not None

    async def add_member(self, project_id: int, user_id: int, role: str) -> ProjectMember:
        member = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        self.session.add(member)
        await self.commit(
            "add project member",
            on_conflict=BadRequestError(
                "User is already a member of this project",
                details={"user_id": user_id},
            ),
        )
        await self.session.refresh(member)
        logger.info("Added project member", project_id=project_id, user_id=user_id)
        return member
