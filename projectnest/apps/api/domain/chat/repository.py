"""Chat repository implementation."""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update

from core.logging import get_logger
from domain.common.repository import BaseRepository

from .models import ChatConversation, ChatMessage

logger = get_logger(__name__)


class ChatRepository(BaseRepository):
    """Repository for conversations and their messages."""

    async def get_conversation(
        self, conversation_uid: uuid.UUID, include_inactive: bool = False
    ) -> Optional[ChatConversation]:
        query = select(ChatConversation).where(
            ChatConversation.conversation_uid == conversation_uid
        )
        if not include_inactive:
            query = query.where(ChatConversation.is_active == True)  # noqa: E712
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_recent(self, project_id: int, limit: int) -> List[ChatConversation]:
        """Most recently touched conversations first."""
        query = (
            select(ChatConversation)
            .where(
                ChatConversation.project_id == project_id,
                ChatConversation.is_active == True,  # noqa: E712
            )
            .order_by(
                ChatConversation.updated_at.desc().nulls_last(),
                ChatConversation.created_at.desc(),
                ChatConversation.id.desc(),
            )
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_active(self, project_id: int) -> int:
        result = await self.session.execute(
            select(func.count(ChatConversation.id)).where(
                ChatConversation.project_id == project_id,
                ChatConversation.is_active == True,  # noqa: E712
            )
        )
        return int(result.scalar_one())

    async def _evict_oldest(self, project_id: int, acting_user_id: int) -> None:
        oldest_id = (
            select(ChatConversation.id)
            .where(
                ChatConversation.project_id == project_id,
                ChatConversation.is_active == True,  # noqa: E712
            )
            .order_by(
                ChatConversation.updated_at.asc().nulls_first(),
                ChatConversation.created_at.asc(),
                ChatConversation.id.asc(),
            )
            .limit(1)
        )
        oldest = (await self.session.execute(oldest_id)).scalar_one_or_none()
        if oldest is None:
            return
        await self.session.execute(
            update(ChatConversation)
            .where(ChatConversation.id == oldest)
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        logger.info("Evicted oldest conversation", project_id=project_id)

    async def create_conversation(
        self, conversation: ChatConversation, max_active: int
    ) -> ChatConversation:
        """Insert a conversation, evicting the oldest one when at capacity.

        Count, eviction and insert share one transaction. Two concurrent
        creates can still both observe a full project and both insert.
        """
        acting_user_id = conversation.created_by
        if await self.count_active(conversation.project_id) >= max_active:
            await self._evict_oldest(conversation.project_id, acting_user_id)
        self.session.add(conversation)
        await self.commit("create conversation")
        await self.session.refresh(conversation)
        logger.info(
            "Created conversation",
            conversation_uid=str(conversation.conversation_uid),
        )
        return conversation

    async def soft_delete_conversation(
        self, conversation_uid: uuid.UUID, acting_user_id: int
    ) -> bool:
        result = await self.session.execute(
            update(ChatConversation)
            .where(
                ChatConversation.conversation_uid == conversation_uid,
                ChatConversation.is_active == True,  # noqa: E712
            )
            .values(
                is_active=False,
                updated_at=datetime.utcnow(),
                updated_by=acting_user_id,
            )
        )
        if not result.rowcount:
            return False
        await self.commit("delete conversation")
        logger.info("Soft deleted conversation", conversation_uid=str(conversation_uid))
        return True

    async def list_messages(self, conversation_id: int) -> List[ChatMessage]:
        query = (
            select(ChatMessage)
            .where(ChatMessage.conversation_id == conversation_id)
            .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_message(
        self, conversation: ChatConversation, message: ChatMessage
    ) -> ChatMessage:
        """Insert a message and mark its conversation as recently used."""
        self.session.add(message)
        conversation.updated_at = datetime.utcnow()
        conversation.updated_by = message.created_by
        await self.commit("create message")
        await self.session.refresh(message)
        return message
