from fastapi import APIRouter

from sportsapp.core.config import settings
from sportsapp.core.redis_client import redis_client


router = APIRouter()


def health_payload() -> dict:
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "cache": "enabled" if redis_client.enabled else "disabled",
    }


@router.get("/health", tags=["Health"])
async def health_check():
    """Liveness check for load balancers"""
    return health_payload()
