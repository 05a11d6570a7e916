"""
User service - profiles, search, avatars and account deletion.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from surf_club.errors import InvalidPassword, NotFound, ServerError, ValidationError
from surf_club.models import Message, SessionComment, SessionLike, SurfSession, User
from surf_club.services.session_service import session_service
from surf_club.utils.security import verify_password
from surf_club.utils.uploads import remove_upload

logger = logging.getLogger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10


def _owned_session_ids(user_id: UUID):
    return select(SurfSession.id).where(SurfSession.user_id == user_id)


# Account deletion steps, in dependency order. Each runs inside the caller's
# transaction; none of them commits.

def _delete_comments(db: Session, user_id: UUID) -> None:
    db.query(SessionComment).filter(SessionComment.user_id == user_id).delete(synchronize_session=False)


def _delete_likes(db: Session, user_id: UUID) -> None:
    db.query(SessionLike).filter(SessionLike.user_id == user_id).delete(synchronize_session=False)


def _delete_messages(db: Session, user_id: UUID) -> None:
    db.query(Message).filter(
        or_(Message.sender_id == user_id, Message.receiver_id == user_id)
    ).delete(synchronize_session=False)


def _delete_sessions(db: Session, user_id: UUID) -> None:
    # Other users' likes and comments on these sessions go first
    db.query(SessionComment).filter(
        SessionComment.session_id.in_(_owned_session_ids(user_id))
    ).delete(synchronize_session=False)
    db.query(SessionLike).filter(
        SessionLike.session_id.in_(_owned_session_ids(user_id))
    ).delete(synchronize_session=False)
    db.query(SurfSession).filter(SurfSession.user_id == user_id).delete(synchronize_session=False)


def _delete_user(db: Session, user_id: UUID) -> None:
    db.query(User).filter(User.id == user_id).delete(synchronize_session=False)


class UserService:
    """Service for user profile operations."""

    @staticmethod
    def session_count(db: Session, user_id: UUID) -> int:
        return db.query(func.count(SurfSession.id)).filter(SurfSession.user_id == user_id).scalar() or 0

    @staticmethod
    def profile(db: Session, user: User) -> Dict[str, Any]:
        """The user's own profile with their session count."""
        return {
            "id": user.id,
            "email": user.email,
            "username": user.username,
            "avatar_url": user.avatar_url,
            "created_at": user.created_at,
            "session_count": UserService.session_count(db, user.id),
        }

    @staticmethod
    def update_avatar(db: Session, user: User, avatar_url: Optional[str]) -> User:
        """
        Point the user's avatar at a freshly stored upload.

        Raises:
            ValidationError: If no file was provided
        """
        if not avatar_url:
            raise ValidationError.single("avatar", "No avatar file provided")

        previous = user.avatar_url
        user.avatar_url = avatar_url
        db.commit()
        db.refresh(user)

        if previous and previous != avatar_url:
            remove_upload(previous)

        return user

    @staticmethod
    def search(db: Session, query: Optional[str]) -> List[User]:
        """
        Case-insensitive substring search on usernames.

        Raises:
            ValidationError: If the query is shorter than two characters
        """
        query = (query or "").strip()
        if len(query) < SEARCH_MIN_LENGTH:
            raise ValidationError.single("q", "Search query must be at least 2 characters")

        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return (
            db.query(User)
            .filter(User.username.ilike(f"%{escaped}%", escape="\\"))
            .order_by(User.username)
            .limit(SEARCH_LIMIT)
            .all()
        )

    @staticmethod
    def public_profile(db: Session, viewer: User, user_id: UUID) -> Dict[str, Any]:
        """
        Another user's public profile and sessions.

        Raises:
            NotFound: If the user does not exist
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")

        return {
            "user": {
                "id": user.id,
                "username": user.username,
                "avatar_url": user.avatar_url,
                "created_at": user.created_at,
                "session_count": UserService.session_count(db, user.id),
            },
            "sessions": session_service.list_for_user(db, viewer, user.id),
        }

    @staticmethod
    def delete_account(db: Session, user: User, password: Optional[str]) -> None:
        """
        Delete the user and everything they own, all or nothing.

        Order: their comments, their likes, messages sent or received, their
        sessions (with the likes and comments on them), then the user row.

        Raises:
            ValidationError: If no password was given
            InvalidPassword: If the password does not match
            ServerError: If any deletion fails; nothing is deleted in that case
        """
        if not password:
            raise ValidationError.single("password", "Password is required")

        if not verify_password(password, user.password_hash):
            raise InvalidPassword("Invalid password")

        user_id = user.id
        image_urls = [
            url for (url,) in db.query(SurfSession.image_url).filter(
                SurfSession.user_id == user_id, SurfSession.image_url.isnot(None)
            )
        ]
        if user.avatar_url:
            image_urls.append(user.avatar_url)

        try:
            _delete_comments(db, user_id)
            _delete_likes(db, user_id)
            _delete_messages(db, user_id)
            _delete_sessions(db, user_id)
            _delete_user(db, user_id)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.exception("Account deletion rolled back: user_id=%s", user_id)
            raise ServerError("Server error during account deletion") from e

        # Files are only removed once the rows are gone for good
        for url in image_urls:
            remove_upload(url)

        logger.info("Account deleted: user_id=%s", user_id)


# Global service instance
user_service = UserService()
