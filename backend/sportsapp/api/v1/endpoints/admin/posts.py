from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sportsapp.core.database import get_db
from sportsapp.modules.auth.dependencies import require_admin
from sportsapp.schemas.post import MessageResponse, PostResponse, ReportedPostResponse
from sportsapp.services.comment_service import CommentService
from sportsapp.services.post_service import PostService
from sportsapp.services.upload_service import UploadService, get_upload_service

router = APIRouter()


@router.get("/posts", response_model=List[PostResponse])
async def list_posts(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    service = PostService(db)
    return await service.to_responses(await service.list_posts())


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
    uploads: UploadService = Depends(get_upload_service)
):
    await PostService(db).delete_post(post_id, admin_username=admin, uploads=uploads)
    return MessageResponse(message="Post deleted successfully")


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    await CommentService(db).delete(comment_id, admin_username=admin)
    return MessageResponse(message="Comment deleted successfully")


@router.get("/reported-posts", response_model=List[ReportedPostResponse])
async def reported_posts(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Open reports, newest first"""
    return await PostService(db).reported_posts()


@router.delete("/reported-posts/{report_id}", response_model=MessageResponse)
async def ignore_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin)
):
    """Dismiss a report without touching the post"""
    await PostService(db).ignore_report(report_id, admin_username=admin)
    return MessageResponse(message="Report dismissed")
