from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from sportsapp.models.tryout import TryoutApplicationStatus
from sportsapp.schemas.user import UserSummary


class TryoutCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location: str = Field(..., min_length=1, max_length=255)
    date: datetime
    eligibility: Optional[str] = None
    timing: Optional[str] = Field(None, max_length=100)
    venue: Optional[str] = Field(None, max_length=255)
    highlights: Optional[str] = None


class TryoutResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    location: str
    date: datetime
    eligibility: Optional[str] = None
    timing: Optional[str] = None
    venue: Optional[str] = None
    highlights: Optional[str] = None
    deleted: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TryoutApplicationResponse(BaseModel):
    id: int
    user_id: int
    tryout_id: int
    full_name: str
    contact_number: str
    email: str
    video_url: str
    status: TryoutApplicationStatus
    applied_at: datetime
    tryout: TryoutResponse

    class Config:
        from_attributes = True


class AdminTryoutApplicationResponse(TryoutApplicationResponse):
    user: UserSummary


class ApplicationStatusUpdate(BaseModel):
    status: TryoutApplicationStatus
