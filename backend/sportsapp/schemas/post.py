from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from sportsapp.models.post import PostType
from sportsapp.schemas.user import UserSummary


class PostResponse(BaseModel):
    id: int
    user_id: int
    type: PostType
    content: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    points: int
    is_reported: bool
    created_at: datetime
    user: UserSummary = Field(validation_alias=AliasChoices("author", "user"))
    mentioned_users: List[UserSummary] = []
    tagged_users: List[UserSummary] = []

    # Computed per request
    comment_count: int = 0
    user_has_pointed: bool = False

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    content: str
    parent_id: Optional[int] = None

    @field_validator('content')
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment content is required")
        return value


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    parent_id: Optional[int] = None
    created_at: datetime
    user: UserSummary = Field(validation_alias=AliasChoices("author", "user"))
    replies: List["CommentResponse"] = []

    class Config:
        from_attributes = True


class ReportCreate(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class ReportedPostResponse(BaseModel):
    id: int
    post_id: int
    reported_by: int
    reason: Optional[str] = None
    created_at: datetime
    post: PostResponse
    reporter: UserSummary

    class Config:
        from_attributes = True


class PointResponse(BaseModel):
    message: str
    points: int


class MessageResponse(BaseModel):
    message: str
