"""
Direct messaging - one conversation per unordered pair of users
"""

from sqlalchemy import Column, Boolean, DateTime, Integer, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from sportsapp.core.database import Base


class Conversation(Base):
    """
    Two-party conversation.

    The pair is stored ordered (user1_id < user2_id) so there is exactly one
    row per pair. last_seen_by_user1/2 drive the unread computation.
    """
    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_conversations_pair"),
        CheckConstraint("user1_id < user2_id", name="ck_conversations_ordered_pair"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user1_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user2_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Not a foreign key: messages already reference conversations
    last_message_id = Column(Integer, nullable=True)
    last_seen_by_user1 = Column(DateTime, nullable=True)
    last_seen_by_user2 = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user1 = relationship("User", foreign_keys=[user1_id], lazy="selectin")
    user2 = relationship("User", foreign_keys=[user2_id], lazy="selectin")
    last_message = relationship(
        "Message",
        primaryjoin="foreign(Conversation.last_message_id) == Message.id",
        lazy="selectin",
        viewonly=True,
    )

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant(self, user_id: int):
        return self.user2 if self.user1_id == user_id else self.user1

    def last_seen_by(self, user_id: int):
        return self.last_seen_by_user1 if self.user1_id == user_id else self.last_seen_by_user2

    def __repr__(self):
        return f"<Conversation {self.id} ({self.user1_id}, {self.user2_id})>"


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    sender = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Message {self.id} in {self.conversation_id}>"
