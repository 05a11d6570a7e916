"""
Comment service - comments on surf sessions.
"""
import logging
from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from surf_club.errors import NotFound, NotFoundOrUnauthorized
from surf_club.models import SurfSession, SessionComment, User
from surf_club.services.session_service import normalize_paging, pagination

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_LIMIT = 20


def serialize_comment(comment: SessionComment, username: str, avatar_url: str) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "session_id": comment.session_id,
        "user_id": comment.user_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "username": username,
        "avatar_url": avatar_url,
    }


class CommentService:
    """Service for comment operations."""

    @staticmethod
    def list(db: Session, session_id: UUID, page: int = 1, limit: int = DEFAULT_COMMENT_LIMIT) -> Dict[str, Any]:
        """List comments of a session, newest first, with pagination."""
        page, limit = normalize_paging(page, limit, DEFAULT_COMMENT_LIMIT)

        rows = (
            db.query(SessionComment, User.username, User.avatar_url)
            .join(User, User.id == SessionComment.user_id)
            .filter(SessionComment.session_id == session_id)
            .order_by(SessionComment.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total = db.query(func.count(SessionComment.id)).filter(SessionComment.session_id == session_id).scalar() or 0

        return {
            "comments": [serialize_comment(*row) for row in rows],
            "pagination": {**pagination(page, limit, total), "total_comments": total},
        }

    @staticmethod
    def add(db: Session, viewer: User, session_id: UUID, content: str) -> Dict[str, Any]:
        """
        Add a comment to a session.

        Raises:
            NotFound: If the session does not exist
        """
        exists = db.query(SurfSession.id).filter(SurfSession.id == session_id).first()
        if not exists:
            raise NotFound("Session not found")

        comment = SessionComment(user_id=viewer.id, session_id=session_id, content=content)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        logger.info("Comment added: comment_id=%s session_id=%s", comment.id, session_id)

        return serialize_comment(comment, viewer.username, viewer.avatar_url)

    @staticmethod
    def _get_owned(db: Session, viewer: User, comment_id: UUID) -> SessionComment:
        comment = db.query(SessionComment).filter(
            SessionComment.id == comment_id,
            SessionComment.user_id == viewer.id,
        ).first()
        if not comment:
            raise NotFoundOrUnauthorized("Comment not found or unauthorized")
        return comment

    @staticmethod
    def update(db: Session, viewer: User, comment_id: UUID, content: str) -> Dict[str, Any]:
        """
        Edit a comment written by the viewer.

        Raises:
            NotFoundOrUnauthorized: If it does not exist or was written by someone else
        """
        comment = CommentService._get_owned(db, viewer, comment_id)
        comment.content = content
        comment.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(comment)

        return serialize_comment(comment, viewer.username, viewer.avatar_url)

    @staticmethod
    def delete(db: Session, viewer: User, comment_id: UUID) -> None:
        """
        Delete a comment written by the viewer.

        Raises:
            NotFoundOrUnauthorized: If it does not exist or was written by someone else
        """
        comment = CommentService._get_owned(db, viewer, comment_id)
        db.delete(comment)
        db.commit()
        logger.info("Comment deleted: comment_id=%s", comment_id)


# Global service instance
comment_service = CommentService()
