"""
Message model - direct messages between two users.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid, Index
from surf_club.database import Base
import uuid
from datetime import datetime


class Message(Base):
    """Direct message. Immutable once sent apart from read_at."""
    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sender_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    read_at = Column(DateTime, nullable=True)

    __table_args__ = (
        # Unread counts per receiver
        Index("idx_messages_receiver_unread", "receiver_id", "read_at"),
    )

    def __repr__(self):
        return f"<Message(id={self.id}, sender_id={self.sender_id}, receiver_id={self.receiver_id})>"
