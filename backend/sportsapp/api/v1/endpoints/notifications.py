from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.schemas.notification import NotificationResponse, UnreadCountResponse
from sportsapp.schemas.post import MessageResponse
from sportsapp.services.notification_service import NotificationService


router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await NotificationService(db).list_for_user(current_user.id)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return UnreadCountResponse(count=await NotificationService(db).unread_count(current_user.id))


@router.post("/mark-all-seen", response_model=MessageResponse)
async def mark_all_seen(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await NotificationService(db).mark_all_seen(current_user.id)
    return MessageResponse(message="All notifications marked as seen")


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await NotificationService(db).mark_read(notification_id, current_user.id)
    return MessageResponse(message="Notification marked as read")
