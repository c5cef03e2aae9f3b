"""Chat endpoints addressed by conversation id."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.database import get_session
from domain.chat.schemas import (
    ConversationWithMessagesResponse,
    MessageCreate,
    MessageResponse,
)
from domain.user.models import User
from services.chat_service import ChatService

router = APIRouter()


@router.get(
    "/conversations/{conversation_uid}",
    response_model=ConversationWithMessagesResponse,
)
async def get_conversation(
    conversation_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Conversation with its messages, oldest first."""
    return await ChatService(session).get_conversation_with_messages(
        conversation_uid, current_user
    )


@router.delete("/conversations/{conversation_uid}")
async def delete_conversation(
    conversation_uid: UUID,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await ChatService(session).delete_conversation(conversation_uid, current_user)
    return {"message": "Conversation deleted successfully"}


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    request: MessageCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await ChatService(session).create_message(request, current_user)
