"""
Tryout Service - admin-published tryouts and user applications
"""

from typing import Optional, List
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select

from sportsapp.core.exceptions import (
    DuplicateError,
    InvalidStatusTransitionError,
    TryoutApplicationNotFoundError,
    TryoutNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.models.notification import NotificationType
from sportsapp.models.tryout import Tryout, TryoutApplication, TryoutApplicationStatus
from sportsapp.models.user import User
from sportsapp.schemas.tryout import TryoutCreate
from sportsapp.services.notification_service import NotificationService
from sportsapp.services.upload_service import UploadService, VIDEO_TYPES


REVIEW_OUTCOMES = {
    TryoutApplicationStatus.APPROVED: (
        NotificationType.TRYOUT_APPROVED,
        "Your application for {name} has been approved!",
    ),
    TryoutApplicationStatus.REJECTED: (
        NotificationType.TRYOUT_REJECTED,
        "Your application for {name} was not selected this time.",
    ),
}


class TryoutService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active(self) -> List[Tryout]:
        result = await self.db.execute(
            select(Tryout)
            .where(Tryout.deleted == False)  # noqa: E712
            .order_by(Tryout.created_at.desc(), Tryout.id.desc())
        )
        return list(result.scalars().all())

    async def create(self, data: TryoutCreate, admin_username: str) -> Tryout:
        tryout = Tryout(**data.model_dump())
        self.db.add(tryout)
        await self.db.commit()
        await self.db.refresh(tryout)
        logger.log_moderation_event("create", "tryout", tryout.id, admin=admin_username)
        return tryout

    async def soft_delete(self, tryout_id: int, admin_username: str) -> None:
        tryout = await self.db.get(Tryout, tryout_id)
        if not tryout or tryout.deleted:
            raise TryoutNotFoundError(tryout_id)
        tryout.deleted = True
        await self.db.commit()
        logger.log_moderation_event("delete", "tryout", tryout_id, admin=admin_username)

    async def apply(
        self,
        tryout_id: int,
        user: User,
        full_name: Optional[str],
        contact_number: Optional[str],
        email: Optional[str],
        video: Optional[UploadFile],
        uploads: Optional[UploadService] = None,
    ) -> TryoutApplication:
        """
        Apply to an open tryout with a video; one application per user.
        """
        full_name = (full_name or "").strip()
        contact_number = (contact_number or "").strip()
        email = (email or "").strip()
        if not (full_name and contact_number and email):
            raise ValidationError("All fields are required")
        if video is None:
            raise ValidationError("Video file is required", field="video")

        tryout = await self.db.get(Tryout, tryout_id)
        if not tryout or tryout.deleted:
            raise TryoutNotFoundError(tryout_id)

        existing = await self.db.execute(
            select(TryoutApplication.id).where(
                TryoutApplication.tryout_id == tryout.id,
                TryoutApplication.user_id == user.id
            )
        )
        if existing.first():
            raise DuplicateError("You have already applied to this tryout")

        uploads = uploads or UploadService()
        video_url = await uploads.save(video, "video", allowed=VIDEO_TYPES)

        application = TryoutApplication(
            user_id=user.id,
            tryout_id=tryout.id,
            full_name=full_name,
            contact_number=contact_number,
            email=email,
            video_url=video_url,
        )
        self.db.add(application)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            await uploads.delete(video_url)
            raise DuplicateError("You have already applied to this tryout")

        await self.db.refresh(application, attribute_names=["tryout"])
        logger.info(f"@{user.username} applied to tryout {tryout.id}")
        return application

    async def user_applications(self, user_id: int) -> List[TryoutApplication]:
        """Includes applications to tryouts that were later removed"""
        result = await self.db.execute(
            select(TryoutApplication)
            .where(TryoutApplication.user_id == user_id)
            .order_by(TryoutApplication.applied_at.desc(), TryoutApplication.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_applications(self, status: Optional[TryoutApplicationStatus] = None) -> List[TryoutApplication]:
        query = select(TryoutApplication)
        if status:
            query = query.where(TryoutApplication.status == status)
        result = await self.db.execute(
            query.order_by(TryoutApplication.applied_at.desc(), TryoutApplication.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        application_id: int,
        status: TryoutApplicationStatus,
        admin_username: str,
    ) -> TryoutApplication:
        if status not in REVIEW_OUTCOMES:
            raise ValidationError("Status must be approved or rejected", field="status")

        result = await self.db.execute(
            select(TryoutApplication)
            .where(TryoutApplication.id == application_id)
            .execution_options(populate_existing=True)
        )
        application = result.scalar_one_or_none()
        if not application:
            raise TryoutApplicationNotFoundError(application_id)
        if application.status != TryoutApplicationStatus.UNDER_REVIEW:
            raise InvalidStatusTransitionError("application", application.status.value, status.value)

        application.status = status
        notification_type, template = REVIEW_OUTCOMES[status]
        await NotificationService(self.db).notify(
            user_id=application.user_id,
            type=notification_type,
            message=template.format(name=application.tryout.name),
        )
        await self.db.commit()

        logger.log_moderation_event(status.value, "tryout_application", application_id, admin=admin_username)
        return application
