"""
Authentication routes for signup, login, logout, verification and password reset.
"""
import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from logistics.db.session import get_db
from logistics.schemas.user import (
    UserCreate, UserLogin, Token, UserResponse,
    VerifyRequest, ForgotPasswordRequest, ResetPasswordRequest
)
from logistics.models.user import User, UserToken
from logistics.core.config import settings
from logistics.core.security import (
    verify_password, get_password_hash, generate_one_time_token
)
from logistics.core.utils import as_utc, utcnow
from logistics.services.user_service import create_user, issue_token
from logistics.api.dependencies import get_current_user, get_current_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new, unverified user."""
    return create_user(
        db,
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        home_location=user_data.home_location,
        verification_token=generate_one_time_token()
    )


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    access_token = issue_token(db, user)

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(
    token: str = Depends(get_current_token),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Revoke the token used for this request."""
    db.query(UserToken).filter(
        UserToken.user_id == current_user.id,
        UserToken.token == token
    ).delete(synchronize_session=False)
    db.commit()
    return {"message": "Logged out successfully"}


@router.post("/verify", response_model=UserResponse)
async def verify_email(body: VerifyRequest, db: Session = Depends(get_db)):
    """Mark the user owning this verification token as verified."""
    user = db.query(User).filter(User.verification_token == body.token).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid verification token"
        )

    user.is_verified = True
    user.verification_token = None
    db.commit()
    db.refresh(user)
    return user


@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Issue a password reset token. The response never reveals whether the email exists."""
    user = db.query(User).filter(User.email == body.email).first()
    if user:
        user.reset_token = generate_one_time_token()
        user.reset_token_expires_at = utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
        db.commit()
        logger.info(f"Password reset requested for user {user.id}")
    return {"message": "If the account exists, a reset link has been sent"}


@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Set a new password with a reset token and revoke all issued tokens."""
    user = db.query(User).filter(User.reset_token == body.token).first()
    if not user or not user.reset_token_expires_at or as_utc(user.reset_token_expires_at) < utcnow():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    user.hashed_password = get_password_hash(body.new_password)
    user.reset_token = None
    user.reset_token_expires_at = None
    db.query(UserToken).filter(UserToken.user_id == user.id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Password reset for user {user.id}")
    return {"message": "Password has been reset"}
