from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sportsapp.core.database import get_db
from sportsapp.models.drill import UserDrillStatus
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.drill import DrillSubmissionResponse
from sportsapp.services.drill_service import DrillService

router = APIRouter()


@router.get("", response_model=List[DrillSubmissionResponse])
async def list_submissions(
    sport: Optional[str] = Query(None),
    status: Optional[UserDrillStatus] = Query(None),
    username: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Submitted drills, most recent first"""
    return await DrillService(db).list_submissions(sport=sport, status=status, username=username)


@router.post("/{user_drill_id}/approve", response_model=DrillSubmissionResponse)
async def approve_drill(
    user_drill_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await DrillService(db).approve(user_drill_id, admin)


@router.post("/{user_drill_id}/reject", response_model=DrillSubmissionResponse)
async def reject_drill(
    user_drill_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await DrillService(db).reject(user_drill_id, admin)
