"""
Authentication endpoints - registration, email verification, login and
password reset.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from surf_club.database import get_db
from surf_club.schemas import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    AuthResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
    ResendVerificationRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    StatusMessage,
)
from surf_club.services.auth_service import auth_service

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    - Creates an unverified user with a hashed password
    - Sends the email verification link (delivery failures are logged only)
    - Returns a token right away; protected routes stay closed until verified
    """
    user, token = auth_service.register(db, user_data)

    return RegisterResponse(
        message="User created successfully. Please check your email to verify your account.",
        token=token,
        user=user,
        requiresVerification=True,
    )


@router.post("/verify-email", response_model=VerifyEmailResponse)
def verify_email(request: VerifyEmailRequest, db: Session = Depends(get_db)):
    """
    Verify an email address with the token from the verification email.

    - Token expires after 24 hours
    """
    user = auth_service.verify_email(db, request.token)
    return VerifyEmailResponse(message="Email verified successfully", user=user)


@router.post("/resend-verification", response_model=StatusMessage)
def resend_verification(request: ResendVerificationRequest, db: Session = Depends(get_db)):
    """
    Resend the email verification link with a fresh token.
    """
    auth_service.resend_verification(db, request.email)
    return StatusMessage(message="Verification email sent")


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password.

    - Requires a verified email
    - Returns a JWT access token
    """
    user, token = auth_service.login(db, credentials.email, credentials.password)
    return AuthResponse(message="Login successful", token=token, user=user)


@router.post("/forgot-password", response_model=StatusMessage)
def forgot_password(request: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """
    Request password reset link.

    - Sends password reset email if a verified user exists
    - Always returns the same message to prevent email enumeration
    """
    message = auth_service.forgot_password(db, request.email)
    return StatusMessage(message=message)


@router.post("/reset-password", response_model=StatusMessage)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    Reset password with reset token.

    - Token expires after 1 hour
    """
    auth_service.reset_password(db, request.token, request.password)
    return StatusMessage(message="Password reset successfully")
