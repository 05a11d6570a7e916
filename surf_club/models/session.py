"""
SurfSession model - a logged surf session with conditions and rating.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Float, Integer, Uuid
from sqlalchemy.orm import relationship
from surf_club.database import Base
import uuid
from datetime import datetime


class SurfSession(Base):
    """Surf session posted by a user."""
    __tablename__ = "surf_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    location = Column(String(100), nullable=False)

    # Conditions
    wave_height = Column(Float, nullable=False)
    wave_period = Column(Float, nullable=False)
    wind_speed = Column(Float, nullable=False)
    wind_direction = Column(String(2), nullable=False)
    # Tide options: 'low', 'rising', 'high', 'falling'
    tide_type = Column(String(10), nullable=False)
    rating = Column(Integer, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="sessions")
    likes = relationship("SessionLike", back_populates="session", cascade="all, delete-orphan")
    comments = relationship("SessionComment", back_populates="session", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<SurfSession(id={self.id}, user_id={self.user_id}, title={self.title})>"
