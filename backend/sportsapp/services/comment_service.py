"""
Comment Service - threaded comments (one level of replies) on posts
"""

from typing import Optional, List, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from sportsapp.core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.models.notification import NotificationType
from sportsapp.models.post import Comment, Post
from sportsapp.models.user import User
from sportsapp.schemas.post import CommentResponse
from sportsapp.services.notification_service import NotificationService, comment_notification_message


class CommentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _post_or_404(self, post_id: int) -> Post:
        post = await self.db.get(Post, post_id)
        if not post:
            raise PostNotFoundError(post_id)
        return post

    async def list_for_post(self, post_id: int) -> List[CommentResponse]:
        """Top-level comments newest first, each with its replies (newest first)"""
        await self._post_or_404(post_id)

        result = await self.db.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .execution_options(populate_existing=True)
        )
        comments = result.scalars().all()

        replies: Dict[int, List[CommentResponse]] = {}
        for comment in comments:
            if comment.parent_id is not None:
                replies.setdefault(comment.parent_id, []).append(CommentResponse.model_validate(comment))

        threads = []
        for comment in comments:
            if comment.parent_id is None:
                response = CommentResponse.model_validate(comment)
                response.replies = replies.get(comment.id, [])
                threads.append(response)
        return threads

    async def create(
        self,
        post_id: int,
        author: User,
        content: str,
        parent_id: Optional[int] = None,
    ) -> Comment:
        """
        Add a comment (or a reply when parent_id is given).

        The post owner is notified unless they commented themselves.
        """
        post = await self._post_or_404(post_id)

        content = content.strip()
        if not content:
            raise ValidationError("Comment content is required", field="content")

        if parent_id is not None:
            parent = await self.db.get(Comment, parent_id)
            if not parent or parent.post_id != post.id:
                raise ValidationError("Parent comment does not belong to this post", field="parent_id")

        comment = Comment(post_id=post.id, user_id=author.id, content=content, parent_id=parent_id)
        self.db.add(comment)
        await self.db.flush()

        if post.user_id != author.id:
            await NotificationService(self.db).notify(
                user_id=post.user_id,
                type=NotificationType.COMMENT,
                message=comment_notification_message(author.username, content),
                from_user_id=author.id,
                post_id=post.id,
                comment_id=comment.id,
            )

        await self.db.commit()
        await self.db.refresh(comment, attribute_names=["author"])
        logger.debug(f"Comment {comment.id} added to post {post.id} by @{author.username}")
        return comment

    async def delete(
        self,
        comment_id: int,
        user: Optional[User] = None,
        admin_username: Optional[str] = None,
    ) -> None:
        """Allowed for the comment author, the post owner, or the admin"""
        comment = await self.db.get(Comment, comment_id)
        if not comment:
            raise CommentNotFoundError(comment_id)

        if not admin_username:
            post = await self.db.get(Post, comment.post_id)
            allowed_ids = {comment.user_id, post.user_id if post else None}
            if user is None or user.id not in allowed_ids:
                raise AuthorizationError("You cannot delete this comment")

        await self.db.delete(comment)
        await self.db.commit()

        if admin_username:
            logger.log_moderation_event("delete", "comment", comment_id, admin=admin_username)
        else:
            logger.debug(f"Comment {comment_id} deleted by @{user.username}")
