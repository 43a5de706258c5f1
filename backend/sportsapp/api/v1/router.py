from fastapi import APIRouter

from sportsapp.api.v1.endpoints import (
    auth,
    users,
    posts,
    comments,
    notifications,
    drills,
    conversations,
    tryouts,
    news,
    health,
)
from sportsapp.api.v1.endpoints.admin import admin_router

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])
api_router.include_router(comments.router, prefix="/comments", tags=["Comments"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(drills.router, prefix="/drills", tags=["Drills"])
api_router.include_router(conversations.router, prefix="/conversations", tags=["Messaging"])
api_router.include_router(tryouts.router, tags=["Tryouts"])
api_router.include_router(news.router, tags=["News"])
api_router.include_router(admin_router)
