"""
Admin API endpoints for the SportsApp moderation console.
Everything except login/status requires the admin session.
"""
from fastapi import APIRouter

from sportsapp.api.v1.endpoints.admin import session, dashboard, posts, users, drills, redemptions, tryouts

admin_router = APIRouter(prefix="/admin", tags=["Admin"])

admin_router.include_router(session.router, tags=["Admin Session"])
admin_router.include_router(dashboard.router, tags=["Admin Dashboard"])
admin_router.include_router(posts.router, tags=["Admin Posts"])
admin_router.include_router(users.router, tags=["Admin Users"])
admin_router.include_router(drills.router, prefix="/drills", tags=["Admin Drills"])
admin_router.include_router(redemptions.router, prefix="/redemptions", tags=["Admin Redemptions"])
admin_router.include_router(tryouts.router, tags=["Admin Tryouts"])
