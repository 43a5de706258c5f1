from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from sportsapp.core.database import get_db
from sportsapp.core.config import settings
from sportsapp.core.exceptions import AuthenticationError, ValidationError
from sportsapp.core.security import create_session_token
from sportsapp.core.logging_config import logger, set_user_id
from sportsapp.core.rate_limiter import limiter, REGISTER_LIMIT, LOGIN_LIMIT
from sportsapp.models.user import User
from sportsapp.schemas.user import (
    UserRegister,
    UserLogin,
    QuickLoginRequest,
    UserPrivate,
    AuthResponse,
    LogoutResponse,
)
from sportsapp.modules.auth.dependencies import get_current_user
from sportsapp.services.user_service import UserService


router = APIRouter()


def set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(user.id),
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 3600,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_session_cookies(response: Response) -> None:
    for name in (settings.SESSION_COOKIE_NAME, settings.ADMIN_COOKIE_NAME):
        response.delete_cookie(
            key=name,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite=settings.COOKIE_SAMESITE,
        )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    response: Response,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Create an account and log it in"""
    client_ip = request.client.host if request.client else "unknown"
    service = UserService(db)

    try:
        user = await service.register(user_data)
    except ValidationError as e:
        logger.log_auth_event("register", success=False, username=user_data.username,
                              reason=e.message, client_ip=client_ip)
        raise

    remember_token = await service.issue_remember_token(user) if user_data.remember_me else None
    set_session_cookie(response, user)
    set_user_id(str(user.id))
    logger.log_auth_event("register", success=True, username=user.username, client_ip=client_ip)

    return AuthResponse(
        message="Registration successful",
        user=UserPrivate.model_validate(user),
        remember_token=remember_token,
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with username and password"""
    client_ip = request.client.host if request.client else "unknown"
    service = UserService(db)

    try:
        user = await service.authenticate(credentials.username, credentials.password)
    except AuthenticationError:
        logger.log_auth_event("login", success=False, username=credentials.username,
                              reason="invalid_credentials", client_ip=client_ip)
        raise

    remember_token = await service.issue_remember_token(user) if credentials.remember_me else None
    set_session_cookie(response, user)
    set_user_id(str(user.id))
    logger.log_auth_event("login", success=True, username=user.username, client_ip=client_ip)

    return AuthResponse(
        message="Login successful",
        user=UserPrivate.model_validate(user),
        remember_token=remember_token,
    )


@router.post("/quick-login", response_model=AuthResponse)
@limiter.limit(LOGIN_LIMIT)
async def quick_login(
    request: Request,
    response: Response,
    payload: QuickLoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login with a remember-me token"""
    try:
        user = await UserService(db).quick_login(payload.remember_token)
    except AuthenticationError as e:
        logger.log_auth_event("quick_login", success=False, reason=e.message)
        raise

    set_session_cookie(response, user)
    set_user_id(str(user.id))
    logger.log_auth_event("quick_login", success=True, username=user.username)

    return AuthResponse(message="Login successful", user=UserPrivate.model_validate(user))


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response):
    """End the user session (and any admin session in the same browser)"""
    clear_session_cookies(response)
    return LogoutResponse(message="Logged out successfully")


@router.get("/me", response_model=UserPrivate)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info"""
    return current_user
