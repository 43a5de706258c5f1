"""
Feed models - posts, comments, points, mentions, tags and reports
"""

from sqlalchemy import (
    Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sportsapp.core.database import Base


class PostType(str, enum.Enum):
    TEXT = "text"
    PHOTO = "photo"
    VIDEO = "video"


class Post(Base):
    """Feed post"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(SQLEnum(PostType), nullable=False)
    content = Column(Text, nullable=True)
    media_url = Column(Text, nullable=True)
    media_type = Column(String(100), nullable=True)  # MIME type of the upload
    points = Column(Integer, default=0, nullable=False)
    is_reported = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    author = relationship("User", lazy="selectin")
    mentioned_users = relationship(
        "User", secondary="mentions", lazy="selectin", viewonly=True, order_by="User.id"
    )
    tagged_users = relationship(
        "User", secondary="tags", lazy="selectin", viewonly=True, order_by="User.id"
    )

    def __repr__(self):
        return f"<Post {self.id} ({self.type.value if self.type else None}) by {self.user_id}>"


class Comment(Base):
    """Comment on a post; replies reference a parent comment of the same post"""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    author = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Comment {self.id} on post {self.post_id}>"


class PostPoint(Base):
    """A user awarding one point to a post"""
    __tablename__ = "post_points"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_points_post_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Mention(Base):
    __tablename__ = "mentions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ReportedPost(Base):
    """User report against a post, reviewed in the admin console"""
    __tablename__ = "reported_posts"
    __table_args__ = (UniqueConstraint("post_id", "reported_by", name="uq_reported_posts_post_reporter"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    reported_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    post = relationship("Post", lazy="selectin")
    reporter = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<ReportedPost post={self.post_id} by={self.reported_by}>"
