from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.core.exceptions import AuthenticationError
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.schemas.post import PostResponse
from sportsapp.schemas.redemption import RedemptionCreate, RedemptionResponse
from sportsapp.schemas.user import (
    AvailabilityResponse,
    ProfilePictureResponse,
    UserPrivate,
    UserPublic,
    UserSummary,
    UserUpdate,
    VerificationRequestResponse,
)
from sportsapp.services.post_service import PostService
from sportsapp.services.redemption_service import RedemptionService
from sportsapp.services.upload_service import UploadService, get_upload_service, IMAGE_TYPES
from sportsapp.services.user_service import UserService


router = APIRouter()


def ensure_self(current_user: User, user_id: int) -> None:
    if current_user.id != user_id:
        raise AuthenticationError("You can only manage your own account")


# ========== Availability ==========

@router.get("/check-username", response_model=AvailabilityResponse)
async def check_username(
    username: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db)
):
    """Registration-time username check with suggestions"""
    available, suggestions = await UserService(db).check_username(username)
    return AvailabilityResponse(available=available, suggestions=suggestions)


@router.get("/check-username-availability", response_model=AvailabilityResponse)
async def check_username_for_update(
    username: str = Query(..., min_length=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Profile-edit username check; the caller's own name is available"""
    available, suggestions = await UserService(db).check_username_for_update(username, current_user.id)
    return AvailabilityResponse(available=available, suggestions=suggestions)


@router.get("/check-email", response_model=AvailabilityResponse)
async def check_email(email: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    return AvailabilityResponse(available=await UserService(db).email_available(email))


@router.get("/check-phone", response_model=AvailabilityResponse)
async def check_phone(phone: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    return AvailabilityResponse(available=await UserService(db).phone_available(phone))


# ========== Search ==========

@router.get("/search", response_model=List[UserSummary])
async def search_users(
    q: str = Query(""),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Search users by username or full name"""
    return await UserService(db).search(q, current_user.id)


# ========== Profile ==========

@router.get("/{user_id}", response_model=UserPublic)
async def get_profile(user_id: int, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get_or_404(user_id)


@router.put("/{user_id}", response_model=UserPrivate)
async def update_profile(
    user_id: int,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    ensure_self(current_user, user_id)
    return await UserService(db).update_profile(current_user, data)


@router.post("/{user_id}/profile-picture", response_model=ProfilePictureResponse)
async def upload_profile_picture(
    user_id: int,
    profile_picture: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service)
):
    """Upload a new profile image"""
    ensure_self(current_user, user_id)
    url = await uploads.save(profile_picture, "profilePicture", allowed=IMAGE_TYPES)
    previous = current_user.profile_picture
    await UserService(db).set_profile_picture(current_user, url)
    if previous and previous != url:
        await uploads.delete(previous)
    return ProfilePictureResponse(profile_picture=url)


@router.get("/{user_id}/posts", response_model=List[PostResponse])
async def get_user_posts(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """A user's posts, newest first"""
    service = PostService(db)
    posts = await service.list_user_posts(user_id)
    return await service.to_responses(posts, viewer_id=current_user.id)


@router.post("/{user_id}/request-verification", response_model=VerificationRequestResponse)
async def request_verification(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    ensure_self(current_user, user_id)
    user = await UserService(db).request_verification(current_user)
    return VerificationRequestResponse(
        message="Verification request submitted",
        verification_status=user.verification_status,
    )


# ========== Points ==========

@router.post("/{user_id}/redeem-voucher", response_model=RedemptionResponse, status_code=status.HTTP_201_CREATED)
async def redeem_voucher(
    user_id: int,
    data: RedemptionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Exchange points for a voucher"""
    ensure_self(current_user, user_id)
    return await RedemptionService(db).redeem(current_user, data.points_redeemed, data.email)


@router.get("/{user_id}/redemptions", response_model=List[RedemptionResponse])
async def get_redemptions(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    ensure_self(current_user, user_id)
    return await RedemptionService(db).user_redemptions(user_id)
