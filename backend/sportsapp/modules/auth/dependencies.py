from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from sportsapp.core.config import settings
from sportsapp.core.database import get_db
from sportsapp.core.exceptions import AuthenticationError
from sportsapp.core.logging_config import set_user_id
from sportsapp.core.security import decode_token, SESSION_TOKEN_TYPE, ADMIN_TOKEN_TYPE
from sportsapp.models.user import User

# Browsers use the session cookie; API clients may send the same JWT as a bearer token
security = HTTPBearer(auto_error=False)

ADMIN_REQUIRED = "Admin access required"


def _session_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if token := request.cookies.get(settings.SESSION_COOKIE_NAME):
        return token
    if credentials:
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    token = _session_token(request, credentials)
    if not token:
        raise AuthenticationError()

    payload = decode_token(token)
    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise AuthenticationError("Invalid token type")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, user_id)
    if not user:
        raise AuthenticationError("User not found")

    request.state.user_id = user.id
    set_user_id(str(user.id))
    return user


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Get current user (optional)"""
    if not _session_token(request, credentials):
        return None
    try:
        return await get_current_user(request, credentials, db)
    except AuthenticationError:
        return None


def admin_username_from_request(request: Request) -> Optional[str]:
    """Username from a valid admin cookie, or None"""
    token = request.cookies.get(settings.ADMIN_COOKIE_NAME)
    if not token:
        return None
    try:
        payload = decode_token(token)
    except AuthenticationError:
        return None
    if payload.get("type") != ADMIN_TOKEN_TYPE or payload.get("sub") != settings.ADMIN_USERNAME:
        return None
    return payload["sub"]


def is_admin_request(request: Request) -> bool:
    return admin_username_from_request(request) is not None


async def require_admin(request: Request) -> str:
    """Admin session dependency, returns the admin username"""
    username = admin_username_from_request(request)
    if not username:
        raise AuthenticationError(ADMIN_REQUIRED)
    request.state.is_admin = True
    set_user_id(f"admin:{username}")
    return username


async def get_optional_admin(request: Request) -> Optional[str]:
    return admin_username_from_request(request)
