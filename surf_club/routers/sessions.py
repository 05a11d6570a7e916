"""
Session endpoints - feed, CRUD with optional image upload.
"""
from fastapi import APIRouter, Depends, status, UploadFile, File, Form
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
import uuid
from typing import Optional

from surf_club.database import get_db
from surf_club.models import User
from surf_club.schemas import (
    WindDirection,
    TideType,
    SessionFields,
    FeedResponse,
    SessionListResponse,
    SessionDetailResponse,
    SessionEnvelope,
    StatusMessage,
)
from surf_club.services.session_service import session_service, DEFAULT_FEED_LIMIT
from surf_club.utils.dependencies import get_current_verified_user
from surf_club.utils.uploads import save_image, remove_upload

router = APIRouter()


def session_form(
    title: str = Form(..., min_length=1, max_length=100),
    description: Optional[str] = Form(None, max_length=500),
    location: str = Form(..., min_length=1, max_length=100),
    wave_height: float = Form(..., ge=0, le=30),
    wave_period: float = Form(..., ge=0, le=30),
    wind_speed: float = Form(..., ge=0, le=100),
    wind_direction: WindDirection = Form(...),
    tide_type: TideType = Form(...),
    rating: int = Form(..., ge=1, le=5),
) -> SessionFields:
    """Multipart session fields; every violation is reported in one 400."""
    return SessionFields(
        title=title,
        description=description,
        location=location,
        wave_height=wave_height,
        wave_period=wave_period,
        wind_speed=wind_speed,
        wind_direction=wind_direction,
        tide_type=tide_type,
        rating=rating,
    )


@router.get("", response_model=FeedResponse)
def list_feed(
    page: int = 1,
    limit: int = DEFAULT_FEED_LIMIT,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Feed of all sessions.

    - Newest first, paginated
    - Each session carries like/comment counts and whether you liked it
    """
    return session_service.list_feed(db, current_user, page, limit)


@router.get("/my-sessions", response_model=SessionListResponse)
def list_my_sessions(
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    List all sessions of the current user.
    """
    sessions = session_service.list_mine(db, current_user)
    return {"sessions": sessions}


@router.post("", response_model=SessionEnvelope, status_code=status.HTTP_201_CREATED)
async def create_session(
    fields: SessionFields = Depends(session_form),
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Create a surf session.

    - Multipart form with an optional ``image`` file
    """
    image_url = await save_image(image)
    try:
        session = await run_in_threadpool(session_service.create, db, current_user, fields, image_url)
    except Exception:
        remove_upload(image_url)
        raise
    return SessionEnvelope(message="Session created successfully", session=session)


@router.get("/{session_id}", response_model=SessionDetailResponse)
def get_session(
    session_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Get one session with likes and comments count.
    """
    return {"session": session_service.get(db, current_user, session_id)}


@router.put("/{session_id}", response_model=SessionEnvelope)
async def update_session(
    session_id: uuid.UUID,
    fields: SessionFields = Depends(session_form),
    image: Optional[UploadFile] = File(None),
    keep_current_image: Optional[str] = Form(None),
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Update a session you own.

    - A new ``image`` replaces the current one
    - ``keep_current_image=false`` removes the current image
    - Anything else keeps it
    """
    # Ownership is checked before anything is written to disk
    await run_in_threadpool(session_service.get_owned, db, current_user, session_id)

    image_url = await save_image(image)
    try:
        session = await run_in_threadpool(
            session_service.update, db, current_user, session_id, fields, image_url, keep_current_image
        )
    except Exception:
        remove_upload(image_url)
        raise
    return SessionEnvelope(message="Session updated successfully", session=session)


@router.delete("/{session_id}", response_model=StatusMessage)
def delete_session(
    session_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Delete a session you own, with its likes and comments.
    """
    session_service.delete(db, current_user, session_id)
    return StatusMessage(message="Session deleted successfully")
