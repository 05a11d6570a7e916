"""
Comment endpoints - list, add, edit and delete comments on sessions.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import uuid

from surf_club.database import get_db
from surf_club.models import User
from surf_club.schemas import (
    CommentCreate,
    CommentListResponse,
    CommentEnvelope,
    StatusMessage,
)
from surf_club.services.comment_service import comment_service, DEFAULT_COMMENT_LIMIT
from surf_club.utils.dependencies import get_current_verified_user

router = APIRouter()


@router.get("/session/{session_id}", response_model=CommentListResponse)
def list_comments(
    session_id: uuid.UUID,
    page: int = 1,
    limit: int = DEFAULT_COMMENT_LIMIT,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Comments of a session, newest first, paginated.
    """
    return comment_service.list(db, session_id, page, limit)


@router.post("/session/{session_id}", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
def add_comment(
    session_id: uuid.UUID,
    request: CommentCreate,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Comment on a session.

    - Content is trimmed, 1 to 500 characters
    """
    comment = comment_service.add(db, current_user, session_id, request.content)
    return CommentEnvelope(message="Comment added successfully", comment=comment)


@router.put("/{comment_id}", response_model=CommentEnvelope)
def update_comment(
    comment_id: uuid.UUID,
    request: CommentCreate,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Edit one of your comments.
    """
    comment = comment_service.update(db, current_user, comment_id, request.content)
    return CommentEnvelope(message="Comment updated successfully", comment=comment)


@router.delete("/{comment_id}", response_model=StatusMessage)
def delete_comment(
    comment_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Delete one of your comments.
    """
    comment_service.delete(db, current_user, comment_id)
    return StatusMessage(message="Comment deleted successfully")
