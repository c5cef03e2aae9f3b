"""Project membership authorization."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotProjectMemberError, ProjectNotFoundError
from core.logging import get_logger
from domain.project.models import Project, ProjectMember
from domain.user.models import User

logger = get_logger(__name__)


class ProjectAccess:
    """Resolves a project and checks the acting user's membership in it.

    Every nested resource (list, task, note, folder, conversation) is checked
    by resolving its parent chain down to the owning project id first and
    then calling :meth:`require_member_by_id`.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_member(self, project_id: int, user_id: int) -> bool:
        result = await self.session.execute(
            select(ProjectMember.id).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.first() is not None

    async def require_member(self, project_uid: uuid.UUID, user: User) -> Project:
        """Return the active project if ``user`` is a member of it."""
        result = await self.session.execute(
            select(Project).where(
                Project.project_uid == project_uid,
                Project.is_active == True,  # noqa: E712
            )
        )
        project = result.scalar_one_or_none()
        if project is None:
            raise ProjectNotFoundError(project_uid)
        await self._check(project, user)
        return project

    async def require_member_by_id(self, project_id: int, user: User) -> Project:
        """Same as :meth:`require_member` for an internal project id."""
        result = await self.session.execute(
            select(Project).where(
                Project.id == project_id,
                Project.is_active == True,  # noqa: E712
            )
        )
        project = result.scalar_one_or_none()
        if project is None:
            # Internal ids never leave the service
            raise ProjectNotFoundError("parent")
        await self._check(project, user)
        return project

    async def _check(self, project: Project, user: User) -> None:
        if not await self.is_member(project.id, user.id):
            logger.warning(
                "project_access_denied",
                project_uid=str(project.project_uid),
                user_uid=str(user.user_uid),
            )
            raise NotProjectMemberError(project.project_uid)

