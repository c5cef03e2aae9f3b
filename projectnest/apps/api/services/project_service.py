"""Project aggregate service."""

import uuid
from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from core.access import ProjectAccess
from core.exceptions import BadRequestError, ProjectNotFoundError, UserNotFoundError
from core.logging import LoggerMixin
from core.partial_update import UpdateBuilder, present_fields
from domain.common.schemas import DEFAULT_COLOR
from domain.project.models import Project
from domain.project.repository import ProjectRepository
from domain.project.schemas import (
    AddMemberRequest,
    ProjectCreate,
    ProjectMemberResponse,
    ProjectPatch,
    ProjectProgress,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithListsResponse,
    ProjectWithProgressResponse,
)
from domain.user.models import User
from domain.user.repository import UserRepository
from services.list_service import ListService

PROJECT_COLUMNS = (
    "name",
    "description",
    "status",
    "color",
    "position",
    "start_date",
    "end_date",
    "is_private",
    "dbml_content",
    "dbml_layout_data",
    "flowchart_content",
)
PROJECT_NULLABLE = (
    "description",
    "position",
    "start_date",
    "end_date",
    "dbml_content",
    "dbml_layout_data",
    "flowchart_content",
)


def build_progress(total: int, completed: int) -> ProjectProgress:
    return ProjectProgress(
        total_tasks=total,
        completed_tasks=completed,
        todo_tasks=total - completed,
        progress=completed / total if total > 0 else 0.0,
    )


class ProjectService(LoggerMixin):
    """Projects, their progress and their members."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.projects = ProjectRepository(session)
        self.users = UserRepository(session)
        self.access = ProjectAccess(session)

    async def get_projects_with_progress(
        self, user: User
    ) -> List[ProjectWithProgressResponse]:
        projects = await self.projects.list_for_member(user.id)
        responses = []
        for project in projects:
            total, completed = await self.projects.get_task_counts(project.id)
            responses.append(
                ProjectWithProgressResponse(
                    **ProjectResponse.model_validate(project).model_dump(),
                    task_stats=build_progress(total, completed),
                )
            )
        return responses

    async def get_project_with_lists(
        self, project_uid: uuid.UUID, user: User
    ) -> ProjectWithListsResponse:
        project = await self.access.require_member(project_uid, user)
        return ProjectWithListsResponse(
            **ProjectResponse.model_validate(project).model_dump(),
            lists=await ListService(self.session).get_lists_with_tasks(project),
        )

    async def create_project(self, request: ProjectCreate, user: User) -> ProjectResponse:
        """Create a project and enrol its creator as owner."""
        project = Project(
            user_id=user.id,
            name=request.name,
            description=request.description,
            status=request.status.value,
            color=request.color or DEFAULT_COLOR,
            position=request.position,
            start_date=request.start_date,
            end_date=request.end_date,
            is_private=bool(request.is_private),
            dbml_content=request.dbml_content,
            dbml_layout_data=request.dbml_layout_data,
            flowchart_content=request.flowchart_content,
            created_by=user.id,
        )
        project = await self.projects.create_with_owner(project, owner_id=user.id)
        return ProjectResponse.model_validate(project)

    async def update_project(
        self, project_uid: uuid.UUID, request: ProjectUpdate, user: User
    ) -> ProjectResponse:
        """Replace every mutable field."""
        fields = request.model_dump()
        fields["color"] = fields["color"] or DEFAULT_COLOR
        fields["is_private"] = bool(fields["is_private"])
        return await self._apply_update(project_uid, fields, user)

    async def partial_update_project(
        self, project_uid: uuid.UUID, request: ProjectPatch, user: User
    ) -> ProjectResponse:
        return await self._apply_update(project_uid, present_fields(request), user)

    async def _apply_update(
        self, project_uid: uuid.UUID, fields: dict[str, Any], user: User
    ) -> ProjectResponse:
        await self.access.require_member(project_uid, user)
        values = (
            UpdateBuilder("project", nullable=PROJECT_NULLABLE)
            .apply(fields, PROJECT_COLUMNS)
            .build(acting_user_id=user.id)
        )
        project = await self.projects.update_fields(project_uid, values)
        if project is None:
            raise ProjectNotFoundError(project_uid)
        self.log_info("Updated project", project_uid=str(project_uid), fields=sorted(fields))
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_uid: uuid.UUID, user: User) -> None:
        """Soft delete; lists, tasks and notes are left untouched."""
        await self.access.require_member(project_uid, user)
        if not await self.projects.soft_delete(project_uid, user.id):
            raise ProjectNotFoundError(project_uid)

    async def get_project_progress(
        self, project_uid: uuid.UUID, user: User
    ) -> ProjectProgress:
        project = await self.access.require_member(project_uid, user)
        total, completed = await self.projects.get_task_counts(project.id)
        return build_progress(total, completed)

    # ========== Members ==========
    async def get_project_members(
        self, project_uid: uuid.UUID, user: User
    ) -> List[ProjectMemberResponse]:
        project = await self.access.require_member(project_uid, user)
        members = await self.projects.get_members(project.id)
        return [
            ProjectMemberResponse(
                user_uid=member_user.user_uid,
                email=member_user.email,
                name=member_user.name,
                role=member.role,
                joined_at=member.joined_at,
            )
            for member, member_user in members
        ]

    async def add_member_by_email(
        self, project_uid: uuid.UUID, request: AddMemberRequest, user: User
    ) -> ProjectMemberResponse:
        project = await self.access.require_member(project_uid, user)

        new_member = await self.users.get_by_email(request.email)
        if new_member is None or not new_member.is_active:
            raise UserNotFoundError(request.email)

        if await self.projects.is_member(project.id, new_member.id):
            raise BadRequestError(
                "User is already a member of this project",
                details={"email": request.email},
            )

        member = await self.projects.add_member(
            project.id, new_member.id, request.role.value
        )
        self.log_info(
            "Added member",
            project_uid=str(project_uid),
            member_uid=str(new_member.user_uid),
        )
        return ProjectMemberResponse(
            user_uid=new_member.user_uid,
            email=new_member.email,
            name=new_member.name,
            role=member.role,
            joined_at=member.joined_at,
        )
