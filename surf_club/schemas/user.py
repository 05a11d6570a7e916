"""
Pydantic schemas for User model and authentication flows.
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict, constr, field_validator
from uuid import UUID
from datetime import datetime
from typing import Optional, List

from surf_club.schemas.session import SessionFeedItem


class EmailNormalizedModel(BaseModel):
    """Lower-cases the ``email`` field so lookups are case-insensitive."""

    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RegisterRequest(EmailNormalizedModel):
    """Schema for user registration."""
    email: EmailStr
    username: constr(strip_whitespace=True, min_length=3, max_length=30)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(EmailNormalizedModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Schema for user responses (without sensitive data)."""
    id: UUID
    email: str
    username: str
    avatar_url: Optional[str] = None
    email_verified: bool

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Schema for login response."""
    message: str
    token: str
    user: UserResponse


class RegisterResponse(AuthResponse):
    """Schema for registration response."""
    requiresVerification: bool = True


class VerifyEmailRequest(BaseModel):
    """Schema for email verification."""
    token: str = Field(..., min_length=1)


class VerifyEmailResponse(BaseModel):
    message: str
    user: UserResponse


class ResendVerificationRequest(EmailNormalizedModel):
    """Schema for resending the verification email."""
    email: EmailStr


class ForgotPasswordRequest(EmailNormalizedModel):
    """Schema for forgot password request."""
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema for password reset."""
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=128)


class DeleteAccountRequest(BaseModel):
    """Password re-confirmation for account deletion."""
    password: Optional[str] = None


class ProfileResponse(BaseModel):
    """The authenticated user's own profile."""
    id: UUID
    email: str
    username: str
    avatar_url: Optional[str] = None
    created_at: datetime
    session_count: int


class ProfileEnvelope(BaseModel):
    user: ProfileResponse


class AvatarUser(BaseModel):
    id: UUID
    username: str
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AvatarResponse(BaseModel):
    message: str
    user: AvatarUser


class UserSearchResponse(BaseModel):
    users: List[AvatarUser]


class PublicUser(BaseModel):
    id: UUID
    username: str
    avatar_url: Optional[str] = None
    created_at: datetime
    session_count: int


class PublicProfileResponse(BaseModel):
    """Another user's profile with their sessions."""
    user: PublicUser
    sessions: List[SessionFeedItem]
