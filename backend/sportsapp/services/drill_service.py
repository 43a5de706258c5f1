"""
Drill Service - per-sport drill catalogue and the video review workflow:

    not_submitted --submit--> under_review --approve--> accepted
          ^                        |
          +------ re-upload -------+--reject--> rejected
"""

from datetime import datetime
from typing import Optional, List
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from sportsapp.core.config import settings
from sportsapp.core.exceptions import (
    DrillNotFoundError,
    InvalidStatusTransitionError,
    ResourceNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.models.drill import Drill, UserDrill, UserDrillStatus, SPORTS
from sportsapp.models.notification import NotificationType
from sportsapp.models.user import User
from sportsapp.schemas.drill import DrillResponse, UserDrillResponse
from sportsapp.services.notification_service import NotificationService
from sportsapp.services.points import credit_points
from sportsapp.services.upload_service import UploadService, VIDEO_TYPES


UPLOADABLE_STATUSES = (UserDrillStatus.NOT_SUBMITTED, UserDrillStatus.REJECTED)


def drill_approved_message(drill: Drill) -> str:
    return f"Your drill for {drill.sport} - {drill.title} has been approved!"


def drill_rejected_message(drill: Drill) -> str:
    return f"Your drill for {drill.sport} - {drill.title} was rejected. Please try again with a better drill."


class DrillService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def list_sports() -> List[str]:
        return list(SPORTS)

    async def drills_for_sport(self, sport: str) -> List[Drill]:
        result = await self.db.execute(
            select(Drill).where(Drill.sport == sport).order_by(Drill.drill_number)
        )
        return list(result.scalars().all())

    async def user_drills_for_sport(self, user_id: int, sport: str) -> List[UserDrillResponse]:
        """
        Every drill of the sport with the user's progress.

        Drills the user has not started come back as placeholders
        (id 0, status not_submitted).
        """
        drills = await self.drills_for_sport(sport)
        if not drills:
            return []

        result = await self.db.execute(
            select(UserDrill).where(
                UserDrill.user_id == user_id,
                UserDrill.drill_id.in_([drill.id for drill in drills])
            )
            .execution_options(populate_existing=True)
        )
        progress = {user_drill.drill_id: user_drill for user_drill in result.scalars().all()}

        entries = []
        for drill in drills:
            user_drill = progress.get(drill.id)
            if user_drill:
                entries.append(UserDrillResponse.model_validate(user_drill))
            else:
                entries.append(UserDrillResponse(
                    id=0,
                    user_id=user_id,
                    drill_id=drill.id,
                    status=UserDrillStatus.NOT_SUBMITTED,
                    drill=DrillResponse.model_validate(drill),
                ))
        return entries

    async def _get_user_drill(self, user_id: int, drill_id: int) -> Optional[UserDrill]:
        result = await self.db.execute(
            select(UserDrill)
            .where(UserDrill.user_id == user_id, UserDrill.drill_id == drill_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def upload_video(
        self,
        user: User,
        drill_id: int,
        video: UploadFile,
        uploads: Optional[UploadService] = None,
    ) -> UserDrill:
        """
        Attach (or replace) the user's video for a drill.

        Allowed while not_submitted or rejected; a rejected drill returns to
        not_submitted and must be submitted again.
        """
        drill = await self.db.get(Drill, drill_id)
        if not drill:
            raise DrillNotFoundError(drill_id)

        user_drill = await self._get_user_drill(user.id, drill_id)
        if user_drill and user_drill.status not in UPLOADABLE_STATUSES:
            raise InvalidStatusTransitionError("drill", user_drill.status.value, UserDrillStatus.NOT_SUBMITTED.value)

        uploads = uploads or UploadService()
        video_url = await uploads.save(video, "video", allowed=VIDEO_TYPES)

        previous_url = None
        if user_drill is None:
            user_drill = UserDrill(user_id=user.id, drill_id=drill.id)
            self.db.add(user_drill)
        else:
            previous_url = user_drill.video_url

        user_drill.video_url = video_url
        user_drill.status = UserDrillStatus.NOT_SUBMITTED
        user_drill.submitted_at = None
        user_drill.reviewed_at = None
        user_drill.reviewed_by = None

        await self.db.commit()
        await self.db.refresh(user_drill, attribute_names=["drill"])
        await uploads.delete(previous_url)

        logger.info(f"Drill video uploaded: @{user.username} {drill.sport} #{drill.drill_number}")
        return user_drill

    async def submit(self, user: User, drill_id: int) -> UserDrill:
        user_drill = await self._get_user_drill(user.id, drill_id)
        if not user_drill or not user_drill.video_url:
            raise ValidationError("Please upload a video before submitting", field="video")
        if user_drill.status != UserDrillStatus.NOT_SUBMITTED:
            raise InvalidStatusTransitionError("drill", user_drill.status.value, UserDrillStatus.UNDER_REVIEW.value)

        user_drill.status = UserDrillStatus.UNDER_REVIEW
        user_drill.submitted_at = datetime.utcnow()
        await self.db.commit()

        logger.info(f"Drill {drill_id} submitted for review by @{user.username}")
        return user_drill

    # ------------------------------------------------------------------
    # Admin review
    # ------------------------------------------------------------------

    async def list_submissions(
        self,
        sport: Optional[str] = None,
        status: Optional[UserDrillStatus] = None,
        username: Optional[str] = None,
    ) -> List[UserDrill]:
        """Review queue; drills that were never submitted are not listed"""
        query = (
            select(UserDrill)
            .join(Drill, UserDrill.drill_id == Drill.id)
            .join(User, UserDrill.user_id == User.id)
            .where(UserDrill.status != UserDrillStatus.NOT_SUBMITTED)
        )
        if sport:
            query = query.where(Drill.sport == sport)
        if status:
            query = query.where(UserDrill.status == status)
        if username:
            query = query.where(User.username.ilike(f"%{username}%"))

        result = await self.db.execute(
            query.order_by(UserDrill.submitted_at.desc(), UserDrill.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def _review(self, user_drill_id: int, target: UserDrillStatus, admin_username: str) -> UserDrill:
        result = await self.db.execute(
            select(UserDrill)
            .where(UserDrill.id == user_drill_id)
            .execution_options(populate_existing=True)
        )
        user_drill = result.scalar_one_or_none()
        if not user_drill:
            raise ResourceNotFoundError("Drill submission", user_drill_id)
        if user_drill.status != UserDrillStatus.UNDER_REVIEW:
            raise InvalidStatusTransitionError("drill", user_drill.status.value, target.value)

        user_drill.status = target
        user_drill.reviewed_at = datetime.utcnow()
        user_drill.reviewed_by = admin_username
        return user_drill

    async def approve(self, user_drill_id: int, admin_username: str) -> UserDrill:
        """Accept the drill, credit the user and notify them"""
        user_drill = await self._review(user_drill_id, UserDrillStatus.ACCEPTED, admin_username)
        await credit_points(self.db, user_drill.user_id, settings.DRILL_APPROVAL_POINTS)

        await NotificationService(self.db).notify(
            user_id=user_drill.user_id,
            type=NotificationType.DRILL_APPROVED,
            message=drill_approved_message(user_drill.drill),
        )
        await self.db.commit()

        logger.log_moderation_event("approve", "drill", user_drill_id, admin=admin_username)
        return user_drill

    async def reject(self, user_drill_id: int, admin_username: str) -> UserDrill:
        user_drill = await self._review(user_drill_id, UserDrillStatus.REJECTED, admin_username)

        await NotificationService(self.db).notify(
            user_id=user_drill.user_id,
            type=NotificationType.DRILL_REJECTED,
            message=drill_rejected_message(user_drill.drill),
        )
        await self.db.commit()

        logger.log_moderation_event("reject", "drill", user_drill_id, admin=admin_username)
        return user_drill
