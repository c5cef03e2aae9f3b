"""Canvas schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CanvasRequest(BaseModel):
    state_json: str = Field(min_length=1)


class CanvasResponse(BaseModel):
    canvas_uid: uuid.UUID
    project_uid: uuid.UUID
    state_json: str
    created_at: datetime
    updated_at: Optional[datetime] = None
