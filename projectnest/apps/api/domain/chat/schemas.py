"""Chat schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.chat.models import MessageType
from domain.common.schemas import Name


class ConversationCreate(BaseModel):
    name: Name


class ConversationResponse(BaseModel):
    conversation_uid: uuid.UUID
    project_uid: uuid.UUID
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class MessageCreate(BaseModel):
    conversation_uid: uuid.UUID
    content: str = Field(min_length=1)
    message_type: MessageType


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message_uid: uuid.UUID
    conversation_uid: uuid.UUID
    message_type: str
    content: str
    created_at: datetime


class ConversationWithMessagesResponse(ConversationResponse):
    messages: List[MessageResponse] = []
