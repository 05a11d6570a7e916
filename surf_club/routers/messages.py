"""
Direct message endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import uuid

from surf_club.database import get_db
from surf_club.models import User
from surf_club.schemas import (
    SendMessageRequest,
    SendMessageResponse,
    MessageResponse,
    ThreadResponse,
    ConversationListResponse,
    UnreadCountResponse,
)
from surf_club.services.message_service import message_service
from surf_club.utils.dependencies import get_current_verified_user

router = APIRouter()


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Number of unread messages addressed to you.
    """
    return UnreadCountResponse(unread_count=message_service.unread_count(db, current_user.id))


@router.get("/conversations", response_model=ConversationListResponse)
def list_conversations(
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Your conversations, newest first.

    - One entry per person you exchanged messages with, whoever wrote last
    - Includes the latest message and how many of theirs you have not read
    """
    return {"conversations": message_service.list_conversations(db, current_user.id)}


@router.get("/conversation/{user_id}", response_model=ThreadResponse)
def get_conversation(
    user_id: uuid.UUID,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    All messages between you and another user, oldest first.

    - Marks their unread messages to you as read
    """
    return {"messages": message_service.get_thread(db, current_user.id, user_id)}


@router.post("/send", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    request: SendMessageRequest,
    current_user: User = Depends(get_current_verified_user),
    db: Session = Depends(get_db)
):
    """
    Send a message to another user.
    """
    message = message_service.send(db, current_user, request.receiver_id, request.content)
    return SendMessageResponse(
        message="Message sent successfully",
        message_data=MessageResponse.model_validate(message),
    )
