from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.schemas.message import (
    ConversationCreate,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
    UnreadConversationsResponse,
)
from sportsapp.schemas.post import MessageResponse as StatusMessage
from sportsapp.services.message_service import MessageService


router = APIRouter()


@router.get("", response_model=List[ConversationResponse])
async def list_conversations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Caller's conversations, most recently active first"""
    service = MessageService(db)
    conversations = await service.list_conversations(current_user.id)
    return [service.to_response(conversation, current_user.id) for conversation in conversations]


@router.post("", response_model=ConversationResponse)
async def get_or_create_conversation(
    data: ConversationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Open the conversation with another user, creating it on first contact"""
    service = MessageService(db)
    conversation = await service.get_or_create_conversation(current_user.id, data.user_id)
    return service.to_response(conversation, current_user.id)


# Declared before /{conversation_id} so the literal path wins
@router.get("/unread-count", response_model=UnreadConversationsResponse)
async def unread_conversations_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    count = await MessageService(db).unread_conversations_count(current_user.id)
    return UnreadConversationsResponse(count=count)


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
async def conversation_messages(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).messages(conversation_id, current_user.id)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    conversation_id: int,
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).send_message(conversation_id, current_user, data.content)


@router.put("/{conversation_id}/read", response_model=StatusMessage)
async def mark_conversation_read(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await MessageService(db).mark_read(conversation_id, current_user.id)
    return StatusMessage(message="Conversation marked as read")


@router.delete("/{conversation_id}", response_model=StatusMessage)
async def delete_conversation(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await MessageService(db).delete_conversation(conversation_id, current_user.id)
    return StatusMessage(message="Conversation deleted successfully")
