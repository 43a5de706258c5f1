from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from sportsapp.models.drill import UserDrillStatus
from sportsapp.schemas.user import UserSummary


class DrillResponse(BaseModel):
    id: int
    sport: str
    drill_number: int
    title: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserDrillResponse(BaseModel):
    """A user's progress on one drill. id is 0 until the user uploads a video."""
    id: int
    user_id: int
    drill_id: int
    video_url: Optional[str] = None
    status: UserDrillStatus
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    drill: DrillResponse

    class Config:
        from_attributes = True


class DrillSubmissionResponse(UserDrillResponse):
    """Admin review queue entry"""
    user: UserSummary
