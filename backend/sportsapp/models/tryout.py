"""
Tryouts published by the admin and the applications users send to them
"""

from sqlalchemy import (
    Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sportsapp.core.database import Base


class TryoutApplicationStatus(str, enum.Enum):
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class Tryout(Base):
    __tablename__ = "tryouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    eligibility = Column(Text, nullable=True)
    timing = Column(String(100), nullable=True)
    venue = Column(String(255), nullable=True)
    highlights = Column(Text, nullable=True)
    deleted = Column(Boolean, default=False, nullable=False)  # soft delete keeps applications readable
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Tryout {self.name}>"


class TryoutApplication(Base):
    __tablename__ = "tryout_applications"
    __table_args__ = (UniqueConstraint("user_id", "tryout_id", name="uq_tryout_applications_user_tryout"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tryout_id = Column(Integer, ForeignKey("tryouts.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    contact_number = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)
    video_url = Column(Text, nullable=False)
    status = Column(
        SQLEnum(TryoutApplicationStatus), default=TryoutApplicationStatus.UNDER_REVIEW, nullable=False
    )
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", lazy="selectin")
    tryout = relationship("Tryout", lazy="selectin")

    def __repr__(self):
        return f"<TryoutApplication user={self.user_id} tryout={self.tryout_id}>"
