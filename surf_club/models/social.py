"""
Social models - likes and comments on surf sessions.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from surf_club.database import Base
import uuid
from datetime import datetime


class SessionLike(Base):
    """A user's like on a session; at most one per (user, session)."""
    __tablename__ = "session_likes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(Uuid, ForeignKey("surf_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    session = relationship("SurfSession", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("user_id", "session_id", name="uq_session_likes_user_session"),
    )

    def __repr__(self):
        return f"<SessionLike(user_id={self.user_id}, session_id={self.session_id})>"


class SessionComment(Base):
    """Comment on a session."""
    __tablename__ = "session_comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(Uuid, ForeignKey("surf_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    session = relationship("SurfSession", back_populates="comments")
    user = relationship("User")

    def __repr__(self):
        return f"<SessionComment(id={self.id}, session_id={self.session_id}, user_id={self.user_id})>"
