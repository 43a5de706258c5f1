"""
Notification Service - in-app notifications for points, comments and
admin review outcomes (verification, drills, tryouts, redemptions).
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from sportsapp.core.exceptions import NotificationNotFoundError
from sportsapp.core.logging_config import logger
from sportsapp.models.notification import Notification, NotificationType


COMMENT_PREVIEW_LENGTH = 50


def comment_notification_message(username: str, content: str) -> str:
    preview = content[:COMMENT_PREVIEW_LENGTH]
    if len(content) > COMMENT_PREVIEW_LENGTH:
        preview += "..."
    return f"@{username} commented: {preview}"


def point_notification_message(username: str) -> str:
    return f"@{username} gave you a point"


class NotificationService:
    """Create and read notifications for a user"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def notify(
        self,
        user_id: int,
        type: NotificationType,
        message: str,
        from_user_id: Optional[int] = None,
        post_id: Optional[int] = None,
        comment_id: Optional[int] = None,
    ) -> Notification:
        """
        Queue a notification in the current transaction.

        The caller commits, so the notification is written together with
        the change that triggered it.
        """
        notification = Notification(
            user_id=user_id,
            type=type,
            message=message,
            from_user_id=from_user_id,
            post_id=post_id,
            comment_id=comment_id,
        )
        self.db.add(notification)
        logger.debug(f"Notification {type.value} queued for user {user_id}")
        return notification

    async def list_for_user(self, user_id: int) -> List[Notification]:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def unread_count(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read == False  # noqa: E712
            )
        )
        return result.scalar() or 0

    async def mark_read(self, notification_id: int, user_id: int) -> Notification:
        """Mark one notification read; other users' notifications are reported as missing"""
        result = await self.db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id
            )
        )
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotificationNotFoundError(notification_id)

        notification.is_read = True
        await self.db.commit()
        return notification

    async def mark_all_seen(self, user_id: int) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.commit()
        logger.debug(f"Marked {result.rowcount} notifications seen for user {user_id}")
        return result.rowcount
