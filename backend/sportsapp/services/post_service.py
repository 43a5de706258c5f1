"""
Post Service - the feed: posts with media, mentions and tags, points,
reports, and the admin moderation views over them.
"""

from datetime import datetime, timedelta
from typing import Optional, List, Dict, Set, Sequence
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func

from sportsapp.core.exceptions import (
    AuthorizationError,
    DuplicateError,
    PostNotFoundError,
    ResourceNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.models.notification import NotificationType
from sportsapp.models.post import Post, PostType, Comment, PostPoint, Mention, Tag, ReportedPost
from sportsapp.models.user import User
from sportsapp.schemas.post import PostResponse
from sportsapp.services.notification_service import NotificationService, point_notification_message
from sportsapp.services.points import credit_points, increment_post_points
from sportsapp.services.upload_service import UploadService, IMAGE_TYPES, VIDEO_TYPES


MEDIA_TYPES_BY_POST_TYPE = {
    PostType.TEXT: IMAGE_TYPES + VIDEO_TYPES,
    PostType.PHOTO: IMAGE_TYPES,
    PostType.VIDEO: VIDEO_TYPES,
}


class PostService:
    """Feed posts and the interactions on them"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def _load(self, post_id: int) -> Optional[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, post_id: int) -> Post:
        post = await self._load(post_id)
        if not post:
            raise PostNotFoundError(post_id)
        return post

    async def _comment_counts(self, post_ids: Sequence[int]) -> Dict[int, int]:
        if not post_ids:
            return {}
        result = await self.db.execute(
            select(Comment.post_id, func.count(Comment.id))
            .where(Comment.post_id.in_(post_ids))
            .group_by(Comment.post_id)
        )
        return {post_id: count for post_id, count in result.all()}

    async def _pointed_post_ids(self, post_ids: Sequence[int], viewer_id: Optional[int]) -> Set[int]:
        if not post_ids or viewer_id is None:
            return set()
        result = await self.db.execute(
            select(PostPoint.post_id).where(
                PostPoint.post_id.in_(post_ids),
                PostPoint.user_id == viewer_id
            )
        )
        return set(result.scalars().all())

    async def to_responses(self, posts: Sequence[Post], viewer_id: Optional[int] = None) -> List[PostResponse]:
        """Attach comment counts and the viewer's point state"""
        post_ids = [post.id for post in posts]
        counts = await self._comment_counts(post_ids)
        pointed = await self._pointed_post_ids(post_ids, viewer_id)

        responses = []
        for post in posts:
            response = PostResponse.model_validate(post)
            response.comment_count = counts.get(post.id, 0)
            response.user_has_pointed = post.id in pointed
            responses.append(response)
        return responses

    async def to_response(self, post: Post, viewer_id: Optional[int] = None) -> PostResponse:
        return (await self.to_responses([post], viewer_id))[0]

    async def list_posts(self, post_type: Optional[PostType] = None) -> List[Post]:
        query = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
        if post_type:
            query = query.where(Post.type == post_type)
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def list_user_posts(self, user_id: int) -> List[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.user_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def _existing_user_ids(self, user_ids: Sequence[int]) -> List[int]:
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return []
        result = await self.db.execute(select(User.id).where(User.id.in_(unique_ids)))
        found = set(result.scalars().all())
        return [user_id for user_id in unique_ids if user_id in found]

    async def create_post(
        self,
        author: User,
        post_type: PostType,
        content: Optional[str] = None,
        media: Optional[UploadFile] = None,
        mentions: Optional[Sequence[int]] = None,
        tags: Optional[Sequence[int]] = None,
        uploads: Optional[UploadService] = None,
    ) -> Post:
        """
        Create a post, storing its media first.

        Text posts need content; photo and video posts need a matching file.
        Unknown user ids in mentions/tags are dropped.
        """
        content = (content or "").strip() or None

        if post_type == PostType.TEXT and not content:
            raise ValidationError("Content is required for text posts", field="content")
        if post_type in (PostType.PHOTO, PostType.VIDEO) and media is None:
            raise ValidationError(f"A media file is required for {post_type.value} posts", field="media")

        media_url = None
        media_type = None
        if media is not None:
            uploads = uploads or UploadService()
            media_url = await uploads.save(media, "media", allowed=MEDIA_TYPES_BY_POST_TYPE[post_type])
            media_type = media.content_type

        post = Post(
            user_id=author.id,
            type=post_type,
            content=content,
            media_url=media_url,
            media_type=media_type,
        )
        self.db.add(post)
        await self.db.flush()

        for user_id in await self._existing_user_ids(mentions or []):
            self.db.add(Mention(post_id=post.id, user_id=user_id))
        for user_id in await self._existing_user_ids(tags or []):
            self.db.add(Tag(post_id=post.id, user_id=user_id))

        await self.db.commit()
        logger.info(f"Post {post.id} ({post_type.value}) created by @{author.username}")
        return await self.get_or_404(post.id)

    async def delete_post(
        self,
        post_id: int,
        user: Optional[User] = None,
        admin_username: Optional[str] = None,
        uploads: Optional[UploadService] = None,
    ) -> None:
        """Owner or admin only"""
        post = await self.get_or_404(post_id)
        if not admin_username and (user is None or post.user_id != user.id):
            raise AuthorizationError("You can only delete your own posts")

        media_url = post.media_url
        await self.db.delete(post)
        await self.db.commit()

        await (uploads or UploadService()).delete(media_url)
        if admin_username:
            logger.log_moderation_event("delete", "post", post_id, admin=admin_username)
        else:
            logger.info(f"Post {post_id} deleted by owner @{user.username}")

    async def report_post(self, post_id: int, reporter: User, reason: Optional[str] = None) -> ReportedPost:
        post = await self.get_or_404(post_id)

        existing = await self.db.execute(
            select(ReportedPost.id).where(
                ReportedPost.post_id == post.id,
                ReportedPost.reported_by == reporter.id
            )
        )
        if existing.first():
            raise DuplicateError("Post already reported by you")

        report = ReportedPost(post_id=post.id, reported_by=reporter.id, reason=reason)
        self.db.add(report)
        post.is_reported = True

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateError("Post already reported by you")

        logger.info(f"Post {post.id} reported by @{reporter.username}")
        return report

    async def give_point(self, post_id: int, giver: User) -> Post:
        """
        Award one point to a post and its author, then notify the author.

        Raises:
            ValidationError: pointing your own post
            DuplicateError: already pointed
        """
        post = await self.get_or_404(post_id)
        if post.user_id == giver.id:
            raise ValidationError("You cannot point your own post")

        existing = await self.db.execute(
            select(PostPoint.id).where(PostPoint.post_id == post.id, PostPoint.user_id == giver.id)
        )
        if existing.first():
            raise DuplicateError("You have already pointed this post")

        self.db.add(PostPoint(post_id=post.id, user_id=giver.id))
        await increment_post_points(self.db, post.id)
        await credit_points(self.db, post.user_id, 1)

        await NotificationService(self.db).notify(
            user_id=post.user_id,
            type=NotificationType.POINT,
            message=point_notification_message(giver.username),
            from_user_id=giver.id,
            post_id=post.id,
        )

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateError("You have already pointed this post")

        await self.db.refresh(post, attribute_names=["points"])
        logger.debug(f"@{giver.username} pointed post {post.id} (now {post.points})")
        return post

    # ------------------------------------------------------------------
    # Admin moderation
    # ------------------------------------------------------------------

    async def reported_posts(self) -> List[ReportedPost]:
        result = await self.db.execute(
            select(ReportedPost)
            .order_by(ReportedPost.created_at.desc(), ReportedPost.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def ignore_report(self, report_id: int, admin_username: Optional[str] = None) -> None:
        """Drop a report; the post stops being flagged once no reports remain"""
        report = await self.db.get(ReportedPost, report_id)
        if not report:
            raise ResourceNotFoundError("Report", report_id)

        post_id = report.post_id
        await self.db.delete(report)
        await self.db.flush()

        remaining = await self.db.execute(
            select(func.count(ReportedPost.id)).where(ReportedPost.post_id == post_id)
        )
        if not remaining.scalar():
            post = await self.db.get(Post, post_id)
            if post:
                post.is_reported = False

        await self.db.commit()
        logger.log_moderation_event("ignore_report", "post", post_id, admin=admin_username, report_id=report_id)

    async def stats(self) -> Dict[str, int]:
        since = datetime.utcnow() - timedelta(hours=24)
        total = await self.db.execute(select(func.count(Post.id)))
        recent = await self.db.execute(select(func.count(Post.id)).where(Post.created_at >= since))
        reported = await self.db.execute(select(func.count(Post.id)).where(Post.is_reported == True))  # noqa: E712
        return {
            "total_posts": total.scalar() or 0,
            "new_posts_24h": recent.scalar() or 0,
            "reported_posts": reported.scalar() or 0,
        }
