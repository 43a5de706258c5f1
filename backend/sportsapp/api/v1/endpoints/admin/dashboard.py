"""
Admin Dashboard endpoints - moderation queue counts.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from sportsapp.core.database import get_db
from sportsapp.models import User, UserDrill, VoucherRedemption, TryoutApplication
from sportsapp.models.drill import UserDrillStatus
from sportsapp.models.redemption import RedemptionStatus
from sportsapp.models.tryout import TryoutApplicationStatus
from sportsapp.models.user import VerificationStatus
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.admin import AdminStatsResponse
from sportsapp.services.post_service import PostService

router = APIRouter()


@router.get("/posts/stats", response_model=AdminStatsResponse)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Feed totals plus the size of each review queue"""
    post_stats = await PostService(db).stats()

    total_users = await db.scalar(select(func.count(User.id)))
    pending_verifications = await db.scalar(
        select(func.count(User.id)).where(User.verification_status == VerificationStatus.PENDING)
    )
    pending_drills = await db.scalar(
        select(func.count(UserDrill.id)).where(UserDrill.status == UserDrillStatus.UNDER_REVIEW)
    )
    pending_redemptions = await db.scalar(
        select(func.count(VoucherRedemption.id)).where(VoucherRedemption.status == RedemptionStatus.UNDER_REVIEW)
    )
    pending_applications = await db.scalar(
        select(func.count(TryoutApplication.id)).where(
            TryoutApplication.status == TryoutApplicationStatus.UNDER_REVIEW
        )
    )

    return AdminStatsResponse(
        **post_stats,
        total_users=total_users or 0,
        pending_verifications=pending_verifications or 0,
        pending_drills=pending_drills or 0,
        pending_redemptions=pending_redemptions or 0,
        pending_applications=pending_applications or 0,
    )
