"""
Authentication service - business logic for registration, verification,
login and password reset.
"""
import logging
from datetime import datetime, timedelta
from typing import Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from surf_club.config import settings
from surf_club.errors import (
    AlreadyVerified,
    Conflict,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFound,
    ServerError,
    VerificationRequired,
)
from surf_club.models import User
from surf_club.schemas import RegisterRequest
from surf_club.services.email_service import email_service
from surf_club.utils.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    generate_token,
)

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If this email exists, a reset link has been sent"


class AuthService:
    """Service for authentication operations."""

    @staticmethod
    def create_token(user: User) -> str:
        """Issue a JWT access token for a user."""
        return create_access_token(data={"sub": str(user.id)})

    @staticmethod
    def register(db: Session, user_data: RegisterRequest) -> Tuple[User, str]:
        """
        Create a new, unverified user account.

        Args:
            db: Database session
            user_data: User registration data

        Returns:
            Tuple of (User object, access token)

        Raises:
            Conflict: If the email or username is already taken
        """
        existing_user = db.query(User).filter(
            or_(User.email == user_data.email, User.username == user_data.username)
        ).first()
        if existing_user:
            raise Conflict("User already exists")

        verification_token = generate_token()
        user = User(
            email=user_data.email,
            username=user_data.username,
            password_hash=get_password_hash(user_data.password),
            email_verified=False,
            email_verification_token=verification_token,
            email_verification_expires=datetime.utcnow() + timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
        )

        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            db.rollback()
            raise Conflict("User already exists")
        db.refresh(user)
        logger.info("User registered: user_id=%s", user.id)

        # Registration succeeds even if the email cannot be delivered
        if not email_service.send_verification_email(user.email, verification_token, user.username):
            logger.warning("Failed to send verification email to %s", user.email)

        return user, AuthService.create_token(user)

    @staticmethod
    def verify_email(db: Session, token: str) -> User:
        """
        Mark the account owning an unexpired verification token as verified.

        Raises:
            InvalidOrExpiredToken: If no user holds this token or it has expired
        """
        user = db.query(User).filter(
            User.email_verification_token == token,
            User.email_verification_expires > datetime.utcnow(),
        ).first()

        if not user:
            raise InvalidOrExpiredToken("Invalid or expired verification token")

        user.email_verified = True
        user.email_verification_token = None
        user.email_verification_expires = None
        db.commit()
        db.refresh(user)
        logger.info("Email verified: user_id=%s", user.id)

        return user

    @staticmethod
    def resend_verification(db: Session, email: str) -> None:
        """
        Issue a fresh verification token and email it again.

        Raises:
            NotFound: If no user has this email
            AlreadyVerified: If the account is already verified
            ServerError: If the email could not be sent
        """
        user = db.query(User).filter(User.email == email).first()

        if not user:
            raise NotFound("User not found")

        if user.email_verified:
            raise AlreadyVerified("Email already verified")

        new_token = generate_token()
        user.email_verification_token = new_token
        user.email_verification_expires = datetime.utcnow() + timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS)
        db.commit()

        if not email_service.send_verification_email(user.email, new_token, user.username):
            raise ServerError("Failed to send verification email")

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentials: Unknown email or wrong password (same message for both)
            VerificationRequired: If the password is right but the email is unverified
        """
        user = db.query(User).filter(User.email == email).first()

        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials("Invalid credentials")

        if not user.email_verified:
            raise VerificationRequired(user.email)

        return user, AuthService.create_token(user)

    @staticmethod
    def forgot_password(db: Session, email: str) -> str:
        """
        Start the password reset flow.

        Always returns the same message so callers cannot probe which emails exist.
        """
        user = db.query(User).filter(User.email == email, User.email_verified.is_(True)).first()

        if not user:
            return FORGOT_PASSWORD_MESSAGE

        reset_token = generate_token()
        user.password_reset_token = reset_token
        user.password_reset_expires = datetime.utcnow() + timedelta(hours=settings.PASSWORD_RESET_TOKEN_EXPIRE_HOURS)
        db.commit()

        if not email_service.send_password_reset_email(user.email, reset_token, user.username):
            logger.error("Failed to send password reset email to %s", user.email)

        return FORGOT_PASSWORD_MESSAGE

    @staticmethod
    def reset_password(db: Session, token: str, new_password: str) -> None:
        """
        Reset password with reset token.

        Raises:
            InvalidOrExpiredToken: If no user holds this token or it has expired
        """
        user = db.query(User).filter(
            User.password_reset_token == token,
            User.password_reset_expires > datetime.utcnow(),
        ).first()

        if not user:
            raise InvalidOrExpiredToken("Invalid or expired reset token")

        user.password_hash = get_password_hash(new_password)
        user.password_reset_token = None
        user.password_reset_expires = None
        db.commit()
        logger.info("Password reset: user_id=%s", user.id)


# Global service instance
auth_service = AuthService()
