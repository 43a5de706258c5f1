from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from sportsapp.schemas.user import UserSummary


class ConversationCreate(BaseModel):
    user_id: int


class MessageCreate(BaseModel):
    content: str = ""

    @field_validator('content')
    @classmethod
    def strip_content(cls, value: str) -> str:
        return value.strip()


class MessageResponse(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool
    created_at: datetime
    sender: UserSummary

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    id: int
    user1_id: int
    user2_id: int
    user1: UserSummary
    user2: UserSummary
    last_message_id: Optional[int] = None
    last_seen_by_user1: Optional[datetime] = None
    last_seen_by_user2: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    last_message: Optional[MessageResponse] = None

    # Computed for the requesting participant
    other_user: Optional[UserSummary] = None
    has_unread: bool = False

    class Config:
        from_attributes = True


class UnreadConversationsResponse(BaseModel):
    count: int
