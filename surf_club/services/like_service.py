"""
Like service - toggling likes on surf sessions.
"""
import logging
from typing import Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from surf_club.errors import NotFound
from surf_club.models import SurfSession, SessionLike, User

logger = logging.getLogger(__name__)


def _remove_like(db: Session, user_id: UUID, session_id: UUID) -> int:
    """Delete the user's like on the session; returns the number of rows removed."""
    return db.query(SessionLike).filter(
        SessionLike.user_id == user_id,
        SessionLike.session_id == session_id,
    ).delete(synchronize_session=False)


class LikeService:
    """Service for like operations."""

    @staticmethod
    def count(db: Session, session_id: UUID) -> int:
        return db.query(func.count(SessionLike.id)).filter(SessionLike.session_id == session_id).scalar() or 0

    @staticmethod
    def toggle(db: Session, viewer: User, session_id: UUID) -> Tuple[bool, int]:
        """
        Like the session if the viewer has not liked it yet, unlike it otherwise.

        The (user_id, session_id) unique constraint is what keeps likes
        single: an insert that loses a race against a concurrent toggle fails
        with IntegrityError and the session simply stays liked.

        Returns:
            Tuple of (liked, like count)

        Raises:
            NotFound: If the session does not exist
        """
        exists = db.query(SurfSession.id).filter(SurfSession.id == session_id).first()
        if not exists:
            raise NotFound("Session not found")

        removed = _remove_like(db, viewer.id, session_id)

        if removed:
            db.commit()
            liked = False
        else:
            db.add(SessionLike(user_id=viewer.id, session_id=session_id))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.info("Concurrent like ignored: user_id=%s session_id=%s", viewer.id, session_id)
            liked = True

        return liked, LikeService.count(db, session_id)

    @staticmethod
    def status(db: Session, viewer: User, session_id: UUID) -> Tuple[int, bool]:
        """
        Returns:
            Tuple of (like count, whether the viewer liked the session)
        """
        user_liked = db.query(SessionLike.id).filter(
            SessionLike.user_id == viewer.id,
            SessionLike.session_id == session_id,
        ).first() is not None
        return LikeService.count(db, session_id), user_liked


# Global service instance
like_service = LikeService()
