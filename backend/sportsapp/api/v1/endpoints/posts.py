from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import json

from sportsapp.core.database import get_db
from sportsapp.core.exceptions import AuthenticationError, ValidationError
from sportsapp.models.post import PostType
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_current_user, get_optional_user, get_optional_admin
from sportsapp.schemas.post import (
    CommentCreate,
    CommentResponse,
    MessageResponse,
    PointResponse,
    PostResponse,
    ReportCreate,
)
from sportsapp.services.comment_service import CommentService
from sportsapp.services.post_service import PostService
from sportsapp.services.upload_service import UploadService, get_upload_service


router = APIRouter()


def parse_user_ids(raw: Optional[str], field: str) -> List[int]:
    """Form fields carry user ids as a JSON array string"""
    if not raw:
        return []
    try:
        values = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"{field} must be a JSON array of user ids", field=field)
    if not isinstance(values, list):
        raise ValidationError(f"{field} must be a JSON array of user ids", field=field)
    try:
        return [int(value) for value in values]
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a JSON array of user ids", field=field)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    type: Optional[PostType] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Feed, newest first, optionally filtered by post type"""
    service = PostService(db)
    posts = await service.list_posts(type)
    return await service.to_responses(posts, viewer_id=current_user.id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    type: PostType = Form(...),
    content: Optional[str] = Form(None),
    mentions: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    media: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service)
):
    """Create a text, photo or video post"""
    service = PostService(db)
    post = await service.create_post(
        author=current_user,
        post_type=type,
        content=content,
        media=media,
        mentions=parse_user_ids(mentions, "mentions"),
        tags=parse_user_ids(tags, "tags"),
        uploads=uploads,
    )
    return await service.to_response(post, viewer_id=current_user.id)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    service = PostService(db)
    post = await service.get_or_404(post_id)
    return await service.to_response(post, viewer_id=current_user.id if current_user else None)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    admin_username: Optional[str] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service)
):
    """Delete a post (owner or admin)"""
    if not current_user and not admin_username:
        raise AuthenticationError()
    await PostService(db).delete_post(post_id, user=current_user, admin_username=admin_username, uploads=uploads)
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/report", response_model=MessageResponse)
async def report_post(
    post_id: int,
    data: Optional[ReportCreate] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await PostService(db).report_post(post_id, current_user, reason=data.reason if data else None)
    return MessageResponse(message="Post reported successfully")


@router.post("/{post_id}/point", response_model=PointResponse)
async def give_point(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Give a point to another user's post"""
    post = await PostService(db).give_point(post_id, current_user)
    return PointResponse(message="Point given successfully", points=post.points)


# ========== Comments ==========

@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await CommentService(db).list_for_post(post_id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: int,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Comment on a post, or reply to a comment with parent_id"""
    return await CommentService(db).create(post_id, current_user, data.content, parent_id=data.parent_id)
