from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from sportsapp.core.database import get_db
from sportsapp.core.exceptions import AuthenticationError
from sportsapp.models.user import User
from sportsapp.modules.auth.dependencies import get_optional_user, get_optional_admin
from sportsapp.schemas.post import MessageResponse
from sportsapp.services.comment_service import CommentService


router = APIRouter()


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    admin_username: Optional[str] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a comment (its author, the post owner, or the admin)"""
    if not current_user and not admin_username:
        raise AuthenticationError()
    await CommentService(db).delete(comment_id, user=current_user, admin_username=admin_username)
    return MessageResponse(message="Comment deleted successfully")
