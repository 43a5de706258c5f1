from sportsapp.services.upload_service import UploadService, upload_service
from sportsapp.services.notification_service import NotificationService
from sportsapp.services.user_service import UserService
from sportsapp.services.post_service import PostService
from sportsapp.services.comment_service import CommentService
from sportsapp.services.drill_service import DrillService
from sportsapp.services.message_service import MessageService
from sportsapp.services.tryout_service import TryoutService
from sportsapp.services.redemption_service import RedemptionService
from sportsapp.services.news_service import NewsService

__all__ = [
    "UploadService",
    "upload_service",
    "NotificationService",
    "UserService",
    "PostService",
    "CommentService",
    "DrillService",
    "MessageService",
    "TryoutService",
    "RedemptionService",
    "NewsService",
]
