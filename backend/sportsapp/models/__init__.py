# Re-export all models for convenient imports
from sportsapp.models.user import User, UserType, VerificationStatus
from sportsapp.models.remember_token import RememberToken
from sportsapp.models.post import Post, PostType, Comment, PostPoint, Mention, Tag, ReportedPost
from sportsapp.models.notification import Notification, NotificationType
from sportsapp.models.drill import Drill, UserDrill, UserDrillStatus, SPORTS
from sportsapp.models.message import Conversation, Message
from sportsapp.models.tryout import Tryout, TryoutApplication, TryoutApplicationStatus
from sportsapp.models.redemption import VoucherRedemption, RedemptionStatus

__all__ = [
    # Users
    "User",
    "UserType",
    "VerificationStatus",
    "RememberToken",
    # Feed
    "Post",
    "PostType",
    "Comment",
    "PostPoint",
    "Mention",
    "Tag",
    "ReportedPost",
    "Notification",
    "NotificationType",
    # Drills
    "Drill",
    "UserDrill",
    "UserDrillStatus",
    "SPORTS",
    # Messaging
    "Conversation",
    "Message",
    # Tryouts
    "Tryout",
    "TryoutApplication",
    "TryoutApplicationStatus",
    # Points economy
    "VoucherRedemption",
    "RedemptionStatus",
]
