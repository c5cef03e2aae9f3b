"""Chat conversation service."""

import uuid
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from config import get_settings
from core.access import ProjectAccess
from core.exceptions import ConversationNotFoundError
from core.logging import LoggerMixin
from domain.chat.models import ChatConversation, ChatMessage
from domain.chat.repository import ChatRepository
from domain.chat.schemas import (
    ConversationCreate,
    ConversationResponse,
    ConversationWithMessagesResponse,
    MessageCreate,
    MessageResponse,
)
from domain.project.models import Project
from domain.user.models import User


def _to_response(conversation: ChatConversation, project: Project) -> ConversationResponse:
    return ConversationResponse(
        conversation_uid=conversation.conversation_uid,
        project_uid=project.project_uid,
        name=conversation.name,
        created_at=conversation.created_at,
        updated_at=conversation.updated_at,
    )


class ChatService(LoggerMixin):
    """Per-project conversations, capped at a fixed number of active threads."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.chats = ChatRepository(session)
        self.access = ProjectAccess(session)
        self.max_conversations = get_settings().chat_max_conversations

    async def _get_authorized(
        self, conversation_uid: uuid.UUID, user: User
    ) -> tuple[ChatConversation, Project]:
        conversation = await self.chats.get_conversation(conversation_uid)
        if conversation is None:
            raise ConversationNotFoundError(conversation_uid)
        project = await self.access.require_member_by_id(conversation.project_id, user)
        return conversation, project

    async def get_conversations(
        self, project_uid: uuid.UUID, user: User
    ) -> List[ConversationResponse]:
        project = await self.access.require_member(project_uid, user)
        conversations = await self.chats.list_recent(project.id, self.max_conversations)
        return [_to_response(c, project) for c in conversations]

    async def create_conversation(
        self, project_uid: uuid.UUID, request: ConversationCreate, user: User
    ) -> ConversationResponse:
        """Create a conversation; the oldest active one is evicted when full."""
        project = await self.access.require_member(project_uid, user)
        conversation = await self.chats.create_conversation(
            ChatConversation(project_id=project.id, name=request.name, created_by=user.id),
            max_active=self.max_conversations,
        )
        return _to_response(conversation, project)

    async def get_conversation_with_messages(
        self, conversation_uid: uuid.UUID, user: User
    ) -> ConversationWithMessagesResponse:
        conversation, project = await self._get_authorized(conversation_uid, user)
        messages = await self.chats.list_messages(conversation.id)
        return ConversationWithMessagesResponse(
            **_to_response(conversation, project).model_dump(),
            messages=[
                MessageResponse(
                    message_uid=m.message_uid,
                    conversation_uid=conversation.conversation_uid,
                    message_type=m.message_type,
                    content=m.content,
                    created_at=m.created_at,
                )
                for m in messages
            ],
        )

    async def create_message(self, request: MessageCreate, user: User) -> MessageResponse:
        conversation, _ = await self._get_authorized(request.conversation_uid, user)
        message = await self.chats.create_message(
            conversation,
            ChatMessage(
                conversation_id=conversation.id,
                message_type=request.message_type.value,
                content=request.content,
                created_by=user.id,
            ),
        )
        return MessageResponse(
            message_uid=message.message_uid,
            conversation_uid=conversation.conversation_uid,
            message_type=message.message_type,
            content=message.content,
            created_at=message.created_at,
        )

    async def delete_conversation(self, conversation_uid: uuid.UUID, user: User) -> None:
        await self._get_authorized(conversation_uid, user)
        if not await self.chats.soft_delete_conversation(conversation_uid, user.id):
            raise ConversationNotFoundError(conversation_uid)
        self.log_info("Deleted conversation", conversation_uid=str(conversation_uid))
