from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sportsapp.core.database import get_db
from sportsapp.models.tryout import TryoutApplicationStatus
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.post import MessageResponse
from sportsapp.schemas.tryout import (
    AdminTryoutApplicationResponse,
    ApplicationStatusUpdate,
    TryoutCreate,
    TryoutResponse,
)
from sportsapp.services.tryout_service import TryoutService

router = APIRouter()


@router.post("/tryouts", response_model=TryoutResponse, status_code=status.HTTP_201_CREATED)
async def create_tryout(
    data: TryoutCreate,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await TryoutService(db).create(data, admin)


@router.delete("/tryouts/{tryout_id}", response_model=MessageResponse)
async def delete_tryout(
    tryout_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Hide a tryout; existing applications keep pointing at it"""
    await TryoutService(db).soft_delete(tryout_id, admin)
    return MessageResponse(message="Tryout deleted successfully")


@router.get("/tryout-applications", response_model=List[AdminTryoutApplicationResponse])
async def list_applications(
    status: Optional[TryoutApplicationStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await TryoutService(db).list_applications(status)


@router.put("/tryout-applications/{application_id}/status", response_model=AdminTryoutApplicationResponse)
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await TryoutService(db).update_status(application_id, data.status, admin)
