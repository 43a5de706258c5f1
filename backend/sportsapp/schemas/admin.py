from pydantic import BaseModel
from typing import Optional


class AdminLogin(BaseModel):
    # Optional so a missing field is reported as 400, like other admin errors
    username: Optional[str] = None
    password: Optional[str] = None


class AdminLoginResponse(BaseModel):
    message: str
    is_admin: bool = True


class AdminStatusResponse(BaseModel):
    is_admin: bool


class AdminStatsResponse(BaseModel):
    total_posts: int
    new_posts_24h: int
    total_users: int
    reported_posts: int
    pending_verifications: int
    pending_drills: int
    pending_redemptions: int
    pending_applications: int
