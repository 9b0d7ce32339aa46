"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime
from logistics.core.utils import normalize_email


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    home_location: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str


class UserAdminCreate(UserCreate):
    """Schema for an admin creating a user directly."""
    is_admin: bool = False
    is_verified: bool = False


class UserUpdate(BaseModel):
    """Schema for a user updating their own profile."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    home_location: Optional[str] = None


class UserAdminUpdate(UserUpdate):
    """Schema for admin update of any user."""
    is_admin: Optional[bool] = None
    is_verified: Optional[bool] = None


class UserResponse(UserBase):
    """Schema for user response. Secrets and tokens are never included."""
    id: int
    is_admin: bool
    is_verified: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


class VerifyRequest(BaseModel):
    token: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str
