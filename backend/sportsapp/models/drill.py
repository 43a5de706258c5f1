"""
Drill catalogue and per-user drill submissions
"""

from sqlalchemy import (
    Column, String, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sportsapp.core.database import Base


SPORTS = ["Cricket", "Football", "Hockey", "Badminton", "Kabaddi", "Athletics", "Tennis"]


class UserDrillStatus(str, enum.Enum):
    NOT_SUBMITTED = "not_submitted"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Drill(Base):
    """Catalogue entry: drill number 1-15 within a sport"""
    __tablename__ = "drills"
    __table_args__ = (UniqueConstraint("sport", "drill_number", name="uq_drills_sport_number"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    sport = Column(String(50), nullable=False, index=True)
    drill_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Drill {self.sport} #{self.drill_number}>"


class UserDrill(Base):
    """A user's video for one drill and its review state"""
    __tablename__ = "user_drills"
    __table_args__ = (UniqueConstraint("user_id", "drill_id", name="uq_user_drills_user_drill"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    drill_id = Column(Integer, ForeignKey("drills.id", ondelete="CASCADE"), nullable=False, index=True)
    video_url = Column(Text, nullable=True)
    status = Column(SQLEnum(UserDrillStatus), default=UserDrillStatus.NOT_SUBMITTED, nullable=False)
    submitted_at = Column(DateTime, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(String(100), nullable=True)  # admin username
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    drill = relationship("Drill", lazy="selectin")
    user = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<UserDrill user={self.user_id} drill={self.drill_id} {self.status.value if self.status else None}>"
