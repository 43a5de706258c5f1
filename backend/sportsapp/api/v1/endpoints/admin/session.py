from fastapi import APIRouter, Request, Response

from sportsapp.core.config import settings
from sportsapp.core.rate_limiter import limiter, ADMIN_LOGIN_LIMIT
from sportsapp.core.security import create_admin_token
from sportsapp.modules.auth.admin_auth import authenticate_admin
from sportsapp.modules.auth.dependencies import is_admin_request
from sportsapp.schemas.admin import AdminLogin, AdminLoginResponse, AdminStatusResponse
from sportsapp.schemas.post import MessageResponse

router = APIRouter()


@router.post("/login", response_model=AdminLoginResponse)
@limiter.limit(ADMIN_LOGIN_LIMIT)
async def admin_login(request: Request, response: Response, credentials: AdminLogin):
    """Start an admin session (independent of any user session)"""
    username = authenticate_admin(credentials.username, credentials.password)
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value=create_admin_token(username),
        max_age=settings.ADMIN_SESSION_EXPIRE_HOURS * 3600,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
    return AdminLoginResponse(message="Admin login successful")


@router.get("/status", response_model=AdminStatusResponse)
async def admin_status(request: Request):
    return AdminStatusResponse(is_admin=is_admin_request(request))


@router.post("/logout", response_model=MessageResponse)
async def admin_logout(response: Response):
    response.delete_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
    return MessageResponse(message="Admin logged out successfully")
