"""Board domain models: lists and the tasks they hold."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)

from core.database import Base


class TaskStatus(str, enum.Enum):
    """Task workflow states."""

    todo = "todo"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    """Task priorities."""

    low = "low"
    medium = "medium"
    high = "high"


class TaskList(Base):
    """Ordered column of tasks inside a project."""

    __tablename__ = "lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    list_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )

    name = Column(String(255), nullable=False)
    color = Column(String(7), nullable=False, default="#FFFFFF")
    position = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (Index("ix_lists_project_position", "project_id", "position"),)


class Task(Base):
    """Unit of work inside a list."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    list_id = Column(Integer, ForeignKey("lists.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(10), nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.todo.value)
    color = Column(String(7), nullable=False, default="#FFFFFF")
    position = Column(Integer, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("ix_tasks_list_position", "list_id", "position"),
        Index("ix_tasks_list_completed", "list_id", "is_completed"),
    )
