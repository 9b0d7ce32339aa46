"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from logistics.db.base import BaseModel


class User(BaseModel):
    """User account identified by email."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    home_location = Column(String(100), nullable=True)

    # One-time tokens; never serialized
    verification_token = Column(String(64), nullable=True, index=True)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    tokens = relationship("UserToken", back_populates="user", cascade="all, delete-orphan")


class UserToken(BaseModel):
    """Access token issued to a user at login. Removed on logout."""
    __tablename__ = "user_tokens"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(512), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    user = relationship("User", back_populates="tokens")
