"""List and task schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from domain.board.models import TaskPriority, TaskStatus
from domain.common.schemas import Color, Name, OptionalColor, Position


# ========== Lists ==========
class ListCreate(BaseModel):
    project_uid: uuid.UUID
    name: Name
    color: Optional[OptionalColor] = None
    position: Optional[Position] = None


class ListUpdate(BaseModel):
    """Full update; only name and color are replaced."""

    name: Name
    color: Optional[OptionalColor] = None


class ListPatch(BaseModel):
    name: Optional[Name] = None
    color: Optional[Color] = None
    position: Optional[Position] = None


class ListPositionUpdate(BaseModel):
    position: Position


class ListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    list_uid: uuid.UUID
    name: str
    color: str
    position: int
    created_at: datetime
    updated_at: Optional[datetime] = None


# ========== Tasks ==========
class TaskCreate(BaseModel):
    list_uid: uuid.UUID
    title: Name
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: TaskStatus = TaskStatus.todo
    color: Optional[OptionalColor] = None
    position: Optional[Position] = None
    is_completed: Optional[bool] = None
    due_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Full update of a task's mutable fields."""

    title: Name
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: TaskStatus = TaskStatus.todo
    color: Optional[OptionalColor] = None
    position: Optional[Position] = None
    is_completed: Optional[bool] = None
    due_date: Optional[datetime] = None


class TaskPatch(BaseModel):
    title: Optional[Name] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    color: Optional[Color] = None
    position: Optional[Position] = None
    is_completed: Optional[bool] = None
    due_date: Optional[datetime] = None


class MoveTaskRequest(BaseModel):
    list_uid: uuid.UUID


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_uid: uuid.UUID
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    status: str
    color: str
    position: Optional[int] = None
    is_completed: bool
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ListWithTasksResponse(ListResponse):
    tasks: List[TaskResponse] = []
