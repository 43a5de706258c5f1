from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.redemption import AdminRedemptionResponse, RedemptionStatusUpdate
from sportsapp.services.redemption_service import RedemptionService

router = APIRouter()


@router.get("", response_model=List[AdminRedemptionResponse])
async def list_redemptions(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await RedemptionService(db).list_all()


@router.put("/{redemption_id}/status", response_model=AdminRedemptionResponse)
async def update_redemption_status(
    redemption_id: int,
    data: RedemptionStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Approve, or reject and refund, a voucher request"""
    return await RedemptionService(db).update_status(redemption_id, data.status, admin)
