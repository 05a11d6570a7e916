"""
User endpoints - profile, avatar, search, public profiles and account deletion.
"""
from fastapi import APIRouter, Depends, UploadFile, File
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
import uuid
from typing import Optional

from surf_club.database import get_db
from surf_club.models import User
from surf_club.schemas import (
    ProfileEnvelope,
    AvatarResponse,
    UserSearchResponse,
    PublicProfileResponse,
    DeleteAccountRequest,
    StatusMessage,
)
from surf_club.services.user_service import user_service
from surf_club.utils.dependencies import get_current_verified_user
from surf_club.utils.uploads import save_image, remove_upload

router = APIRouter()


@router.get("/profile", response_model=ProfileEnvelope)
def get_my_profile(
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Get current user's profile with their session count.
    """
    return {"user": user_service.profile(db, current_user)}


@router.put("/avatar", response_model=AvatarResponse)
async def update_avatar(
    avatar: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Upload a new avatar.

    - Accepts image files (JPEG, PNG, GIF, WEBP)
    - Max size: 5MB (configurable)
    """
    avatar_url = await save_image(avatar, field="avatar")
    try:
        user = await run_in_threadpool(user_service.update_avatar, db, current_user, avatar_url)
    except Exception:
        remove_upload(avatar_url)
        raise
    return AvatarResponse(message="Avatar updated successfully", user=user)


@router.delete("/delete-account", response_model=StatusMessage)
def delete_account(
    request: DeleteAccountRequest,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Permanently delete your account.

    - Requires your password
    - Removes your comments, likes, messages, sessions and the account itself
    - All or nothing: a failure leaves everything in place
    """
    user_service.delete_account(db, current_user, request.password)
    return StatusMessage(message="Account deleted successfully")


@router.get("/search", response_model=UserSearchResponse)
def search_users(
    q: Optional[str] = None,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Search users by username (at least 2 characters, max 10 results).
    """
    return {"users": user_service.search(db, q)}


@router.get("/{user_id}", response_model=PublicProfileResponse)
def get_user(
    user_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Public profile of a user with their sessions.
    """
    return user_service.public_profile(db, current_user, user_id)
