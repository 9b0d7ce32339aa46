"""
User management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from logistics.core.exceptions import NotFoundError
from logistics.db.session import get_db
from logistics.schemas.user import (
    UserResponse, UserUpdate, UserAdminCreate, UserAdminUpdate, PasswordChange
)
from logistics.models.user import User, UserToken
from logistics.core.security import verify_password, get_password_hash
from logistics.core.utils import normalize_email
from logistics.services.user_service import create_user
from logistics.api.dependencies import get_current_user, get_current_admin, get_current_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def get_user_by_email(email: str, db: Session) -> User:
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's profile."""
    for field, value in user_data.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.put("/me/password")
async def change_password(
    body: PasswordChange,
    token: str = Depends(get_current_token),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change password. Tokens issued to other sessions are revoked."""
    if not verify_password(body.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    current_user.hashed_password = get_password_hash(body.new_password)
    db.query(UserToken).filter(
        UserToken.user_id == current_user.id,
        UserToken.token != token
    ).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Password changed for user {current_user.id}")
    return {"message": "Password updated successfully"}


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user_as_admin(
    user_data: UserAdminCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a user directly, optionally as an admin."""
    return create_user(
        db,
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        home_location=user_data.home_location,
        is_admin=user_data.is_admin,
        is_verified=user_data.is_verified
    )


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """List all users."""
    return db.query(User).order_by(User.email).all()


@router.get("/{email}", response_model=UserResponse)
async def get_user(
    email: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Get user by email."""
    return get_user_by_email(email, db)


@router.put("/{email}", response_model=UserResponse)
async def update_user(
    email: str,
    user_data: UserAdminUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update any user's profile and flags."""
    user = get_user_by_email(email, db)
    for field, value in user_data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


@router.delete("/{email}")
async def delete_user(
    email: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete user by email."""
    user = get_user_by_email(email, db)
    db.delete(user)
    db.commit()
    logger.info(f"User {user.id} deleted by admin {admin.id}")
    return {"message": "User deleted successfully"}
