"""Project domain models."""

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
    UniqueConstraint,
    Uuid,
)

from core.database import Base


class ProjectStatus(str, enum.Enum):
    """Project lifecycle states."""

    active = "active"
    inactive = "inactive"
    completed = "completed"


class MemberRole(str, enum.Enum):
    """Project membership roles."""

    owner = "owner"
    member = "member"


class Project(Base):
    """Top-level container for lists, notes, canvas and chat."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ProjectStatus.active.value)
    color = Column(String(7), nullable=False, default="#FFFFFF")
    position = Column(Integer, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)

    # Large design artifacts edited by the frontend
    dbml_content = Column(Text, nullable=True)
    dbml_layout_data = Column(Text, nullable=True)
    flowchart_content = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("ix_projects_user_active", "user_id", "is_active"),
        Index("ix_projects_position", "position"),
    )


class ProjectMember(Base):
    """Membership of a user in a project."""

    __tablename__ = "project_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(20), nullable=False, default=MemberRole.member.value)
    joined_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
        Index("ix_project_members_user", "user_id"),
    )
