from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.core.logging_config import logger
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.post import MessageResponse
from sportsapp.schemas.user import UserPrivate
from sportsapp.services.user_service import UserService

router = APIRouter()


@router.get("/users", response_model=List[UserPrivate])
async def list_users(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """All users, newest first"""
    return await UserService(db).list_all()


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Delete a user with their posts, comments, messages and other records"""
    await UserService(db).delete(user_id)
    logger.log_moderation_event("delete", "user", user_id, admin=admin)
    return MessageResponse(message="User deleted successfully")


@router.get("/verification-requests", response_model=List[UserPrivate])
async def verification_requests(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    return await UserService(db).verification_requests()


@router.post("/verify-user/{user_id}", response_model=UserPrivate)
async def verify_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    user = await UserService(db).verify(user_id)
    logger.log_moderation_event("verify", "user", user_id, admin=admin)
    return user


@router.post("/reject-user/{user_id}", response_model=UserPrivate)
async def reject_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    user = await UserService(db).reject_verification(user_id)
    logger.log_moderation_event("reject_verification", "user", user_id, admin=admin)
    return user
