from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
import re

from sportsapp.models.user import UserType, VerificationStatus


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9_.]*$')


def validate_username(value: str) -> str:
    """Raise ValueError if the username breaks the naming rules"""
    if len(value) < USERNAME_MIN_LENGTH:
        raise ValueError(f"Username must be at least {USERNAME_MIN_LENGTH} characters long")
    if len(value) > USERNAME_MAX_LENGTH:
        raise ValueError(f"Username cannot exceed {USERNAME_MAX_LENGTH} characters")
    if not USERNAME_PATTERN.match(value):
        raise ValueError("Username format is invalid")
    if ".." in value:
        raise ValueError("Username cannot have consecutive dots")
    if value.endswith("."):
        raise ValueError("Username cannot end with a dot")
    return value


class UserRegister(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    username: str
    user_type: UserType = UserType.SPORTS_FAN
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=20)
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)
    remember_me: bool = False

    @field_validator('username')
    @classmethod
    def check_username(cls, value: str) -> str:
        return validate_username(value)

    @model_validator(mode='after')
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class QuickLoginRequest(BaseModel):
    remember_token: Optional[str] = None


class UserSummary(BaseModel):
    """Author/participant block embedded in other responses"""
    id: int
    username: str
    full_name: str
    profile_picture: Optional[str] = None
    is_verified: bool = False

    class Config:
        from_attributes = True


class UserPublic(UserSummary):
    user_type: UserType
    bio: Optional[str] = None
    verification_status: VerificationStatus
    points: int
    created_at: datetime


class UserPrivate(UserPublic):
    """Profile as seen by its owner or the admin"""
    email: str
    phone: str
    verification_request_date: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    user: UserPrivate
    remember_token: Optional[str] = None


class LogoutResponse(BaseModel):
    message: str
    redirect: str = "/login"


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    username: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=1000)
    profile_picture: Optional[str] = None
    user_type: Optional[UserType] = None

    @field_validator('username')
    @classmethod
    def check_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_username(value)


class AvailabilityResponse(BaseModel):
    available: bool
    suggestions: List[str] = []


class ProfilePictureResponse(BaseModel):
    profile_picture: str


class VerificationRequestResponse(BaseModel):
    message: str
    verification_status: VerificationStatus
