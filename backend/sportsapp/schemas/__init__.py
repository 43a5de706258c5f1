# Pydantic schemas
from sportsapp.schemas.user import (
    UserRegister,
    UserLogin,
    UserSummary,
    UserPublic,
    UserPrivate,
    UserUpdate,
    AuthResponse,
)
from sportsapp.schemas.post import PostResponse, CommentCreate, CommentResponse
from sportsapp.schemas.notification import NotificationResponse
from sportsapp.schemas.message import ConversationResponse, MessageResponse
from sportsapp.schemas.news import NewsArticle, NewsResponse
