"""
Rate Limiting for the SportsApp API
===================================
Implements rate limiting using slowapi, backed by Redis when REDIS_URL
is configured and by process memory otherwise.

Default limit applies per user (or per client IP when anonymous).
Credential endpoints have their own stricter limits:
- /auth/register: 5 req/min
- /auth/login, /auth/quick-login: 10 req/min
- /admin/login: 5 req/min (brute force protection)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from sportsapp.core.config import settings
from sportsapp.core.logging_config import logger


REGISTER_LIMIT = "5/minute"
LOGIN_LIMIT = "10/minute"
ADMIN_LOGIN_LIMIT = "5/minute"


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key based on the authenticated principal.

    Priority:
    1. Authenticated user ID (set on request.state by the auth dependency)
    2. Admin session
    3. IP address (for anonymous users)
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"

    if getattr(request.state, 'is_admin', False):
        return "admin"

    return f"ip:{get_remote_address(request)}"


def get_storage_uri() -> str:
    """Redis storage when configured, otherwise in-memory"""
    return settings.REDIS_URL or "memory://"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=get_storage_uri(),
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON body with a Retry-After header.
    """
    retry_after = "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limit", "http_path": request.url.path},
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": int(retry_after),
        },
        headers={
            "Retry-After": retry_after,
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )
