"""
Message Service - direct messages between two users.

Conversations are deduplicated by storing the participant pair ordered
(smaller id first). Unread state is derived from the conversation's last
message and the per-participant last-seen timestamp; nothing is pushed,
clients poll the unread count.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete, update, or_

from sportsapp.core.exceptions import ConversationNotFoundError, UserNotFoundError, ValidationError
from sportsapp.core.logging_config import logger
from sportsapp.models.message import Conversation, Message
from sportsapp.models.user import User
from sportsapp.schemas.message import ConversationResponse
from sportsapp.schemas.user import UserSummary


def ordered_pair(user_a: int, user_b: int):
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


def has_unread(conversation: Conversation, user_id: int) -> bool:
    """
    True when the other participant sent the last message after the
    user last looked at the conversation.
    """
    last_message = conversation.last_message
    if last_message is None or last_message.sender_id == user_id:
        return False
    last_seen = conversation.last_seen_by(user_id)
    return last_seen is None or last_seen < last_message.created_at


class MessageService:
    """
    Service for two-party conversations.

    Every conversation-scoped call checks that the caller participates;
    outsiders get the same 404 as a missing conversation.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_pair(self, user1_id: int, user2_id: int) -> Optional[Conversation]:
        result = await self.db.execute(
            select(Conversation)
            .where(Conversation.user1_id == user1_id, Conversation.user2_id == user2_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_create_conversation(self, user_id: int, other_user_id: int) -> Conversation:
        """Return the pair's conversation, creating it on first contact"""
        if user_id == other_user_id:
            raise ValidationError("You cannot message yourself", field="user_id")
        if not await self.db.get(User, other_user_id):
            raise UserNotFoundError(other_user_id)

        user1_id, user2_id = ordered_pair(user_id, other_user_id)
        conversation = await self._find_pair(user1_id, user2_id)
        if conversation:
            return conversation

        self.db.add(Conversation(user1_id=user1_id, user2_id=user2_id, updated_at=datetime.utcnow()))
        try:
            await self.db.commit()
        except IntegrityError:
            # Created concurrently by the other participant
            await self.db.rollback()

        conversation = await self._find_pair(user1_id, user2_id)
        logger.info(f"Conversation {conversation.id} ready for users {user1_id} and {user2_id}")
        return conversation

    async def get_for_participant(self, conversation_id: int, user_id: int) -> Conversation:
        result = await self.db.execute(
            select(Conversation)
            .where(Conversation.id == conversation_id)
            .execution_options(populate_existing=True)
        )
        conversation = result.scalar_one_or_none()
        if not conversation or not conversation.has_participant(user_id):
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def list_conversations(self, user_id: int) -> List[Conversation]:
        result = await self.db.execute(
            select(Conversation)
            .where(or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id))
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    def to_response(self, conversation: Conversation, user_id: int) -> ConversationResponse:
        response = ConversationResponse.model_validate(conversation)
        response.other_user = UserSummary.model_validate(conversation.other_participant(user_id))
        response.has_unread = has_unread(conversation, user_id)
        return response

    async def messages(self, conversation_id: int, user_id: int) -> List[Message]:
        await self.get_for_participant(conversation_id, user_id)
        result = await self.db.execute(
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def send_message(self, conversation_id: int, sender: User, content: str) -> Message:
        conversation = await self.get_for_participant(conversation_id, sender.id)

        content = (content or "").strip()
        if not content:
            raise ValidationError("Message content is required", field="content")

        message = Message(conversation_id=conversation.id, sender_id=sender.id, content=content)
        self.db.add(message)
        await self.db.flush()

        conversation.last_message_id = message.id
        conversation.updated_at = message.created_at or datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(message, attribute_names=["sender"])
        logger.debug(f"Message {message.id} sent in conversation {conversation.id}")
        return message

    async def delete_conversation(self, conversation_id: int, user_id: int) -> None:
        conversation = await self.get_for_participant(conversation_id, user_id)

        conversation.last_message_id = None
        await self.db.execute(delete(Message).where(Message.conversation_id == conversation.id))
        await self.db.delete(conversation)
        await self.db.commit()
        logger.info(f"Conversation {conversation_id} deleted by user {user_id}")

    async def mark_read(self, conversation_id: int, user_id: int) -> Conversation:
        """Mark the other participant's messages read and stamp the caller's last-seen"""
        conversation = await self.get_for_participant(conversation_id, user_id)

        await self.db.execute(
            update(Message)
            .where(
                Message.conversation_id == conversation.id,
                Message.sender_id != user_id,
                Message.is_read == False  # noqa: E712
            )
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )

        now = datetime.utcnow()
        if conversation.user1_id == user_id:
            conversation.last_seen_by_user1 = now
        else:
            conversation.last_seen_by_user2 = now

        await self.db.commit()
        return conversation

    async def unread_conversations_count(self, user_id: int) -> int:
        conversations = await self.list_conversations(user_id)
        return sum(1 for conversation in conversations if has_unread(conversation, user_id))
