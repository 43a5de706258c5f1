from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime

from sportsapp.models.notification import NotificationType
from sportsapp.models.post import PostType
from sportsapp.schemas.user import UserSummary


class NotificationPost(BaseModel):
    id: int
    type: PostType
    content: Optional[str] = None
    media_url: Optional[str] = None
    user: UserSummary = Field(validation_alias=AliasChoices("author", "user"))

    class Config:
        from_attributes = True


class NotificationComment(BaseModel):
    id: int
    content: str

    class Config:
        from_attributes = True


class NotificationResponse(BaseModel):
    id: int
    type: NotificationType
    message: str
    is_read: bool
    created_at: datetime
    from_user: Optional[UserSummary] = None
    post: Optional[NotificationPost] = None
    comment: Optional[NotificationComment] = None

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    count: int
