from pydantic import BaseModel, EmailStr
from datetime import datetime

from sportsapp.models.redemption import RedemptionStatus
from sportsapp.schemas.user import UserSummary


class RedemptionCreate(BaseModel):
    points_redeemed: int
    email: EmailStr


class RedemptionResponse(BaseModel):
    id: int
    user_id: int
    email: str
    points_redeemed: int
    voucher_amount: int
    status: RedemptionStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AdminRedemptionResponse(RedemptionResponse):
    user: UserSummary


class RedemptionStatusUpdate(BaseModel):
    status: RedemptionStatus
