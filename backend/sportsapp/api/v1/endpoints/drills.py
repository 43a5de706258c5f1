from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.core.exceptions import ResourceNotFoundError
from sportsapp.models.drill import SPORTS
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.schemas.drill import UserDrillResponse
from sportsapp.services.drill_service import DrillService
from sportsapp.services.upload_service import UploadService, get_upload_service


router = APIRouter()


def resolve_sport(sport: str) -> str:
    for name in SPORTS:
        if name.lower() == sport.lower():
            return name
    raise ResourceNotFoundError("Sport", sport)


@router.get("/sports", response_model=List[str])
async def list_sports():
    return DrillService.list_sports()


@router.get("/{sport}", response_model=List[UserDrillResponse])
async def user_drills_for_sport(
    sport: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The sport's drills with the caller's progress on each"""
    return await DrillService(db).user_drills_for_sport(current_user.id, resolve_sport(sport))


@router.post("/{drill_id}/upload", response_model=UserDrillResponse)
async def upload_drill_video(
    drill_id: int,
    video: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service)
):
    return await DrillService(db).upload_video(current_user, drill_id, video, uploads=uploads)


@router.post("/{drill_id}/submit", response_model=UserDrillResponse)
async def submit_drill(
    drill_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Send an uploaded drill video for admin review"""
    return await DrillService(db).submit(current_user, drill_id)
