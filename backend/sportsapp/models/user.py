from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Text
from datetime import datetime
import enum

from sportsapp.core.database import Base


class UserType(str, enum.Enum):
    """Kind of account chosen at registration"""
    SPORTS_FAN = "Sports Fan"
    ATHLETE = "Athlete"


class VerificationStatus(str, enum.Enum):
    """Verified-badge request lifecycle"""
    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    username = Column(String(20), unique=True, index=True, nullable=False)
    user_type = Column(SQLEnum(UserType), default=UserType.SPORTS_FAN, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    # Profile fields
    bio = Column(Text, nullable=True)
    profile_picture = Column(Text, nullable=True)

    # Verification badge
    is_verified = Column(Boolean, default=False, nullable=False)
    verification_status = Column(
        SQLEnum(VerificationStatus), default=VerificationStatus.NONE, nullable=False
    )
    verification_request_date = Column(DateTime, nullable=True)

    # Points economy balance
    points = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User @{self.username}>"
