"""Canvas domain models."""

import json
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid

from core.database import Base

DEFAULT_CANVAS_STATE = {
    "nodes": [],
    "edges": [],
    "viewport": {"x": 0, "y": 0, "zoom": 1},
}


def default_canvas_state() -> str:
    """Serialized empty graph used for lazily created canvases."""
    return json.dumps(DEFAULT_CANVAS_STATE, separators=(",", ":"))


class Canvas(Base):
    """Brainstorm board state, one per project."""

    __tablename__ = "canvases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    canvas_uid = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    state_json = Column(Text, nullable=False, default=default_canvas_state)

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
