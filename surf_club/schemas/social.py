"""
Pydantic schemas for likes, comments and direct messages.
"""
from pydantic import BaseModel, ConfigDict, constr
from pydantic.alias_generators import to_camel
from uuid import UUID
from datetime import datetime
from typing import Optional, List

from surf_club.schemas.session import Pagination


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Likes

class LikeToggleResponse(CamelModel):
    message: str
    liked: bool
    like_count: int


class LikeStatusResponse(CamelModel):
    like_count: int
    user_liked: bool


# Comments

class CommentCreate(BaseModel):
    content: constr(strip_whitespace=True, min_length=1, max_length=500)


class CommentResponse(BaseModel):
    """Comment joined with its author."""
    id: UUID
    session_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
    username: Optional[str] = None
    avatar_url: Optional[str] = None


class CommentPagination(Pagination):
    total_comments: int


class CommentListResponse(BaseModel):
    comments: List[CommentResponse]
    pagination: CommentPagination


class CommentEnvelope(BaseModel):
    message: str
    comment: CommentResponse


# Messages

class SendMessageRequest(BaseModel):
    receiver_id: UUID
    content: constr(strip_whitespace=True, min_length=1, max_length=1000)


class MessageResponse(BaseModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    created_at: datetime
    read_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ThreadMessage(MessageResponse):
    sender_username: str
    receiver_username: str


class ThreadResponse(BaseModel):
    messages: List[ThreadMessage]


class SendMessageResponse(CamelModel):
    message: str
    message_data: MessageResponse


class ConversationItem(BaseModel):
    """Latest message and unread count for one counterpart."""
    other_user_id: UUID
    other_username: str
    other_avatar_url: Optional[str] = None
    last_message: str
    last_message_time: datetime
    unread_count: int


class ConversationListResponse(BaseModel):
    conversations: List[ConversationItem]


class UnreadCountResponse(CamelModel):
    unread_count: int
