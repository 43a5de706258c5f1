from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sportsapp.core.database import Base


class RedemptionStatus(str, enum.Enum):
    UNDER_REVIEW = "under review"
    APPROVED = "approved"
    REJECTED = "rejected"


class VoucherRedemption(Base):
    """Points exchanged for a voucher emailed to the user once approved"""
    __tablename__ = "voucher_redemptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    points_redeemed = Column(Integer, nullable=False)
    voucher_amount = Column(Integer, nullable=False)  # rupees
    status = Column(SQLEnum(RedemptionStatus), default=RedemptionStatus.UNDER_REVIEW, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<VoucherRedemption {self.points_redeemed}pts user={self.user_id} {self.status.value if self.status else None}>"
