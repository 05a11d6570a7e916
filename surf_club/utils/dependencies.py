"""
FastAPI dependency functions.
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from surf_club.database import get_db
from surf_club.errors import Unauthorized, Forbidden
from surf_club.models import User
from surf_club.utils.security import decode_token

# Security scheme for JWT bearer tokens; missing headers are reported by
# get_current_user so every auth failure has the same shape.
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.

    Raises:
        Unauthorized: If the token is missing or invalid, or the user no longer exists
    """
    if credentials is None:
        raise Unauthorized("Access token required")

    payload = decode_token(credentials.credentials)

    if payload is None:
        raise Unauthorized("Invalid or expired token")

    # Check token type
    if payload.get("type") != "access":
        raise Unauthorized("Invalid token type")

    # Extract user ID from token
    user_id_str: Optional[str] = payload.get("sub")
    if user_id_str is None:
        raise Unauthorized("Invalid token payload")

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise Unauthorized("Invalid user ID in token")

    # Get user from database
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthorized("User not found")

    return user


def get_current_verified_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to get the current user only if their email is verified.

    Raises:
        Forbidden: If email is not verified
    """
    if not current_user.email_verified:
        raise Forbidden(
            "Email not verified. Please verify your email to access this resource.",
            requiresVerification=True,
        )
    return current_user
