from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sportsapp.core.database import get_db
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.schemas.tryout import TryoutApplicationResponse, TryoutResponse
from sportsapp.services.tryout_service import TryoutService
from sportsapp.services.upload_service import UploadService, get_upload_service


router = APIRouter()


@router.get("/tryouts", response_model=List[TryoutResponse])
async def list_tryouts(db: AsyncSession = Depends(get_db)):
    """Open tryouts, newest first"""
    return await TryoutService(db).list_active()


@router.post(
    "/tryouts/{tryout_id}/apply",
    response_model=TryoutApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_to_tryout(
    tryout_id: int,
    full_name: Optional[str] = Form(None),
    contact_number: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service)
):
    """Apply with contact details and a trial video"""
    return await TryoutService(db).apply(
        tryout_id,
        current_user,
        full_name=full_name,
        contact_number=contact_number,
        email=email,
        video=video,
        uploads=uploads,
    )


@router.get("/user/tryout-applications", response_model=List[TryoutApplicationResponse])
async def my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await TryoutService(db).user_applications(current_user.id)
