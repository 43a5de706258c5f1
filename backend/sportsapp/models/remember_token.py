"""
Remember-me tokens for quick login on a trusted device
"""

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from sportsapp.core.database import Base


class RememberToken(Base):
    """Long-lived login token; only the SHA-256 digest is stored"""
    __tablename__ = "remember_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", lazy="selectin")

    @property
    def is_expired(self) -> bool:
        return self.expires_at < datetime.utcnow()

    def __repr__(self):
        return f"<RememberToken user={self.user_id} expires={self.expires_at}>"
