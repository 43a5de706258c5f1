"""
Redemption Service - exchange points for vouchers.

Points leave the balance when the request is made and come back if the
admin rejects it, so a balance can never be spent twice.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from sportsapp.core.config import settings
from sportsapp.core.exceptions import (
    InsufficientPointsError,
    InvalidStatusTransitionError,
    RedemptionNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.models.notification import NotificationType
from sportsapp.models.redemption import VoucherRedemption, RedemptionStatus
from sportsapp.models.user import User
from sportsapp.services.notification_service import NotificationService
from sportsapp.services.points import credit_points, debit_points


def voucher_amount_for(points: int) -> int:
    return points * settings.POINTS_TO_RUPEE_RATE


class RedemptionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def redeem(self, user: User, points_redeemed: int, email: str) -> VoucherRedemption:
        if points_redeemed <= 0 or not await debit_points(self.db, user.id, points_redeemed):
            raise InsufficientPointsError(points_redeemed, user.points)

        redemption = VoucherRedemption(
            user_id=user.id,
            email=email,
            points_redeemed=points_redeemed,
            voucher_amount=voucher_amount_for(points_redeemed),
        )
        self.db.add(redemption)
        await self.db.commit()
        await self.db.refresh(redemption)

        logger.info(
            f"@{user.username} redeemed {points_redeemed} points (voucher Rs.{redemption.voucher_amount})",
            extra={"event_type": "redemption", "points": points_redeemed},
        )
        return redemption

    async def user_redemptions(self, user_id: int) -> List[VoucherRedemption]:
        result = await self.db.execute(
            select(VoucherRedemption)
            .where(VoucherRedemption.user_id == user_id)
            .order_by(VoucherRedemption.created_at.desc(), VoucherRedemption.id.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[VoucherRedemption]:
        result = await self.db.execute(
            select(VoucherRedemption)
            .order_by(VoucherRedemption.created_at.desc(), VoucherRedemption.id.desc())
            .limit(settings.MAX_REDEMPTIONS_LISTED)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        redemption_id: int,
        status: RedemptionStatus,
        admin_username: str,
    ) -> VoucherRedemption:
        """Approve, or reject and refund, a pending redemption"""
        if status not in (RedemptionStatus.APPROVED, RedemptionStatus.REJECTED):
            raise ValidationError("Status must be approved or rejected", field="status")

        result = await self.db.execute(
            select(VoucherRedemption)
            .where(VoucherRedemption.id == redemption_id)
            .execution_options(populate_existing=True)
        )
        redemption = result.scalar_one_or_none()
        if not redemption:
            raise RedemptionNotFoundError(redemption_id)
        if redemption.status != RedemptionStatus.UNDER_REVIEW:
            raise InvalidStatusTransitionError("redemption", redemption.status.value, status.value)

        redemption.status = status
        notifications = NotificationService(self.db)
        if status == RedemptionStatus.REJECTED:
            await credit_points(self.db, redemption.user_id, redemption.points_redeemed)
            await notifications.notify(
                user_id=redemption.user_id,
                type=NotificationType.REDEMPTION_REJECTED,
                message=(
                    f"Your voucher request for {redemption.points_redeemed} points was rejected. "
                    "The points have been returned to your balance."
                ),
            )
        else:
            await notifications.notify(
                user_id=redemption.user_id,
                type=NotificationType.REDEMPTION_APPROVED,
                message=f"Your Rs.{redemption.voucher_amount} voucher has been approved and sent to {redemption.email}",
            )

        await self.db.commit()
        await self.db.refresh(redemption)
        logger.log_moderation_event(status.value, "redemption", redemption_id, admin=admin_username)
        return redemption
