"""
SQLAlchemy database models.
"""
from .user import User
from .session import SurfSession
from .social import SessionLike, SessionComment
from .message import Message

__all__ = ["User", "SurfSession", "SessionLike", "SessionComment", "Message"]
