"""Project schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr

from domain.board.schemas import ListWithTasksResponse
from domain.common.schemas import Color, Name, OptionalColor, Position
from domain.project.models import MemberRole, ProjectStatus


class ProjectCreate(BaseModel):
    name: Name
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.active
    color: Optional[OptionalColor] = None
    position: Optional[Position] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_private: Optional[bool] = None
    dbml_content: Optional[str] = None
    dbml_layout_data: Optional[str] = None
    flowchart_content: Optional[str] = None


class ProjectUpdate(ProjectCreate):
    """Full update: every mutable field is replaced."""


class ProjectPatch(BaseModel):
    name: Optional[Name] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    color: Optional[Color] = None
    position: Optional[Position] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_private: Optional[bool] = None
    dbml_content: Optional[str] = None
    dbml_layout_data: Optional[str] = None
    flowchart_content: Optional[str] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_uid: uuid.UUID
    name: str
    description: Optional[str] = None
    status: str
    color: str
    position: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_private: bool
    dbml_content: Optional[str] = None
    dbml_layout_data: Optional[str] = None
    flowchart_content: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProjectProgress(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    todo_tasks: int = 0
    progress: float = 0.0


class ProjectWithProgressResponse(ProjectResponse):
    task_stats: ProjectProgress


class ProjectWithListsResponse(ProjectResponse):
    lists: List[ListWithTasksResponse] = []


class AddMemberRequest(BaseModel):
    email: EmailStr
    role: MemberRole = MemberRole.member


class ProjectMemberResponse(BaseModel):
    user_uid: uuid.UUID
    email: str
    name: str
    role: str
    joined_at: datetime
