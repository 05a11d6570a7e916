"""
Like endpoints - toggle and inspect likes on sessions.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import uuid

from surf_club.database import get_db
from surf_club.models import User
from surf_club.schemas import LikeToggleResponse, LikeStatusResponse
from surf_club.services.like_service import like_service
from surf_club.utils.dependencies import get_current_verified_user

router = APIRouter()


@router.post("/session/{session_id}", response_model=LikeToggleResponse)
def toggle_like(
    session_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Like a session, or unlike it if you already did.
    """
    liked, like_count = like_service.toggle(db, current_user, session_id)
    return LikeToggleResponse(
        message="Session liked" if liked else "Session unliked",
        liked=liked,
        like_count=like_count,
    )


@router.get("/session/{session_id}", response_model=LikeStatusResponse)
def get_likes(
    session_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Like count of a session and whether you liked it.
    """
    like_count, user_liked = like_service.status(db, current_user, session_id)
    return LikeStatusResponse(like_count=like_count, user_liked=user_liked)
