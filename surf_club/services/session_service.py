"""
Surf session service - feed, CRUD and per-session social aggregates.
"""
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, func
from sqlalchemy.orm import Query, Session, aliased

from surf_club.errors import NotFound, NotFoundOrUnauthorized, ValidationError
from surf_club.models import SurfSession, SessionLike, SessionComment, User
from surf_club.schemas import SessionFields, SessionResponse
from surf_club.utils.uploads import remove_upload

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 10
MAX_PAGE_SIZE = 100


def normalize_paging(page: int, limit: int, default_limit: int) -> Tuple[int, int]:
    """Clamp page/limit query values to something usable."""
    if page < 1:
        page = 1
    if limit < 1 or limit > MAX_PAGE_SIZE:
        limit = default_limit
    return page, limit


def pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def resolve_image_url(
    current_url: Optional[str],
    uploaded_url: Optional[str],
    keep_current_image: Optional[str] = None,
) -> Optional[str]:
    """
    Decide which image a session ends up with.

    A new upload always wins. Otherwise ``keep_current_image == "false"``
    clears the image and any other value keeps the current one. New sessions
    pass ``current_url=None``, so omitting an image on create stores nothing.
    """
    if uploaded_url:
        return uploaded_url
    if keep_current_image == "false":
        return None
    return current_url


class SessionService:
    """Service for surf session operations."""

    @staticmethod
    def _with_aggregates(db: Session, viewer_id: UUID) -> Query:
        """Sessions joined with author, like/comment counts and the viewer's like."""
        like_counts = (
            db.query(SessionLike.session_id.label("session_id"), func.count(SessionLike.id).label("like_count"))
            .group_by(SessionLike.session_id)
            .subquery()
        )
        comment_counts = (
            db.query(SessionComment.session_id.label("session_id"), func.count(SessionComment.id).label("comment_count"))
            .group_by(SessionComment.session_id)
            .subquery()
        )
        viewer_like = aliased(SessionLike)

        return (
            db.query(
                SurfSession,
                User.username,
                User.avatar_url,
                func.coalesce(like_counts.c.like_count, 0).label("like_count"),
                func.coalesce(comment_counts.c.comment_count, 0).label("comment_count"),
                viewer_like.id.label("viewer_like_id"),
            )
            .join(User, User.id == SurfSession.user_id)
            .outerjoin(like_counts, like_counts.c.session_id == SurfSession.id)
            .outerjoin(comment_counts, comment_counts.c.session_id == SurfSession.id)
            .outerjoin(
                viewer_like,
                and_(viewer_like.session_id == SurfSession.id, viewer_like.user_id == viewer_id),
            )
        )

    @staticmethod
    def serialize(row) -> Dict[str, Any]:
        session, username, avatar_url, like_count, comment_count, viewer_like_id = row
        data = SessionResponse.model_validate(session).model_dump()
        data.update(
            username=username,
            avatar_url=avatar_url,
            like_count=int(like_count or 0),
            comment_count=int(comment_count or 0),
            user_liked=viewer_like_id is not None,
        )
        return data

    @staticmethod
    def list_feed(db: Session, viewer: User, page: int = 1, limit: int = DEFAULT_FEED_LIMIT) -> Dict[str, Any]:
        """
        List all sessions newest first, one page at a time.

        Returns:
            Dict with ``sessions`` and ``pagination``
        """
        page, limit = normalize_paging(page, limit, DEFAULT_FEED_LIMIT)

        rows = (
            SessionService._with_aggregates(db, viewer.id)
            .order_by(SurfSession.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total = db.query(func.count(SurfSession.id)).scalar() or 0

        return {
            "sessions": [SessionService.serialize(row) for row in rows],
            "pagination": {**pagination(page, limit, total), "total_sessions": total},
        }

    @staticmethod
    def list_for_user(db: Session, viewer: User, owner_id: UUID) -> List[Dict[str, Any]]:
        """All sessions of one user, newest first, with the viewer's like state."""
        rows = (
            SessionService._with_aggregates(db, viewer.id)
            .filter(SurfSession.user_id == owner_id)
            .order_by(SurfSession.created_at.desc())
            .all()
        )
        return [SessionService.serialize(row) for row in rows]

    @staticmethod
    def list_mine(db: Session, viewer: User) -> List[Dict[str, Any]]:
        """The viewer's own sessions, newest first."""
        return SessionService.list_for_user(db, viewer, viewer.id)

    @staticmethod
    def get(db: Session, viewer: User, session_id: UUID) -> Dict[str, Any]:
        """
        Get one session with aggregates.

        Raises:
            NotFound: If the session does not exist
        """
        row = SessionService._with_aggregates(db, viewer.id).filter(SurfSession.id == session_id).first()
        if row is None:
            raise NotFound("Session not found")
        return SessionService.serialize(row)

    @staticmethod
    def get_owned(db: Session, viewer: User, session_id: UUID) -> SurfSession:
        """
        Load a session only if the viewer owns it.

        Raises:
            NotFoundOrUnauthorized: If it does not exist or belongs to someone else
        """
        session = db.query(SurfSession).filter(
            SurfSession.id == session_id,
            SurfSession.user_id == viewer.id
        ).first()

        if not session:
            raise NotFoundOrUnauthorized("Session not found or unauthorized")
        return session

    @staticmethod
    def _clean(fields: SessionFields) -> Dict[str, Any]:
        """Trim text fields; a title or location of only spaces is rejected."""
        data = fields.model_dump()
        errors = []
        for name in ("title", "location"):
            data[name] = data[name].strip()
            if not data[name]:
                errors.append({"field": name, "message": f"{name.capitalize()} is required"})
        if errors:
            raise ValidationError(errors)

        description = (data.get("description") or "").strip()
        data["description"] = description or None
        data["wind_direction"] = fields.wind_direction.value
        data["tide_type"] = fields.tide_type.value
        return data

    @staticmethod
    def create(db: Session, viewer: User, fields: SessionFields, image_url: Optional[str] = None) -> SurfSession:
        """Create a session owned by the viewer."""
        session = SurfSession(
            user_id=viewer.id,
            image_url=resolve_image_url(None, image_url),
            **SessionService._clean(fields),
        )

        db.add(session)
        db.commit()
        db.refresh(session)
        logger.info("Session created: session_id=%s user_id=%s", session.id, viewer.id)

        return session

    @staticmethod
    def update(
        db: Session,
        viewer: User,
        session_id: UUID,
        fields: SessionFields,
        image_url: Optional[str] = None,
        keep_current_image: Optional[str] = None,
    ) -> SurfSession:
        """
        Update a session owned by the viewer.

        Raises:
            NotFoundOrUnauthorized: If it does not exist or belongs to someone else
        """
        session = SessionService.get_owned(db, viewer, session_id)
        data = SessionService._clean(fields)

        previous_image = session.image_url
        session.image_url = resolve_image_url(previous_image, image_url, keep_current_image)
        for key, value in data.items():
            setattr(session, key, value)
        session.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(session)

        if previous_image and previous_image != session.image_url:
            remove_upload(previous_image)

        logger.info("Session updated: session_id=%s", session.id)
        return session

    @staticmethod
    def delete(db: Session, viewer: User, session_id: UUID) -> None:
        """
        Delete a session owned by the viewer, with its likes and comments.

        Raises:
            NotFoundOrUnauthorized: If it does not exist or belongs to someone else
        """
        session = SessionService.get_owned(db, viewer, session_id)
        image_url = session.image_url

        db.delete(session)
        db.commit()

        remove_upload(image_url)
        logger.info("Session deleted: session_id=%s", session_id)


# Global service instance
session_service = SessionService()
