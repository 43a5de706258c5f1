from sqlalchemy import Column, Boolean, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sportsapp.core.database import Base


class NotificationType(str, enum.Enum):
    POINT = "point"
    COMMENT = "comment"
    VERIFICATION_APPROVED = "verification_approved"
    VERIFICATION_REJECTED = "verification_rejected"
    DRILL_APPROVED = "drill_approved"
    DRILL_REJECTED = "drill_rejected"
    TRYOUT_APPROVED = "tryout_approved"
    TRYOUT_REJECTED = "tryout_rejected"
    REDEMPTION_APPROVED = "redemption_approved"
    REDEMPTION_REJECTED = "redemption_rejected"


class Notification(Base):
    """In-app notification. from_user_id is null for admin-originated ones."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(SQLEnum(NotificationType), nullable=False)
    from_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    comment_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    from_user = relationship("User", foreign_keys=[from_user_id], lazy="selectin")
    post = relationship("Post", lazy="selectin")
    comment = relationship("Comment", lazy="selectin")

    def __repr__(self):
        return f"<Notification {self.type.value if self.type else None} -> {self.user_id}>"
