"""
Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel

from .session import (
    WindDirection,
    TideType,
    SessionFields,
    SessionResponse,
    SessionFeedItem,
    Pagination,
    FeedPagination,
    FeedResponse,
    SessionListResponse,
    SessionDetailResponse,
    SessionEnvelope,
)
from .user import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    RegisterResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
    ResendVerificationRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    DeleteAccountRequest,
    ProfileResponse,
    ProfileEnvelope,
    AvatarUser,
    AvatarResponse,
    UserSearchResponse,
    PublicUser,
    PublicProfileResponse,
)
from .social import (
    LikeToggleResponse,
    LikeStatusResponse,
    CommentCreate,
    CommentResponse,
    CommentPagination,
    CommentListResponse,
    CommentEnvelope,
    SendMessageRequest,
    MessageResponse,
    ThreadMessage,
    ThreadResponse,
    SendMessageResponse,
    ConversationItem,
    ConversationListResponse,
    UnreadCountResponse,
)


class StatusMessage(BaseModel):
    """Plain ``{"message": ...}`` response."""
    message: str


__all__ = [
    "StatusMessage",
    # Session schemas
    "WindDirection",
    "TideType",
    "SessionFields",
    "SessionResponse",
    "SessionFeedItem",
    "Pagination",
    "FeedPagination",
    "FeedResponse",
    "SessionListResponse",
    "SessionDetailResponse",
    "SessionEnvelope",
    # User schemas
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "RegisterResponse",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    "ResendVerificationRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "DeleteAccountRequest",
    "ProfileResponse",
    "ProfileEnvelope",
    "AvatarUser",
    "AvatarResponse",
    "UserSearchResponse",
    "PublicUser",
    "PublicProfileResponse",
    # Social schemas
    "LikeToggleResponse",
    "LikeStatusResponse",
    "CommentCreate",
    "CommentResponse",
    "CommentPagination",
    "CommentListResponse",
    "CommentEnvelope",
    "SendMessageRequest",
    "MessageResponse",
    "ThreadMessage",
    "ThreadResponse",
    "SendMessageResponse",
    "ConversationItem",
    "ConversationListResponse",
    "UnreadCountResponse",
]
