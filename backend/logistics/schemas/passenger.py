"""
Pydantic schemas for Passenger entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PassengerBase(BaseModel):
    """Base passenger schema."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    job_role: Optional[str] = None


class PassengerCreate(PassengerBase):
    """Schema for passenger creation."""
    pass


class PassengerUpdate(PassengerBase):
    """Schema for passenger update (full replacement)."""
    pass


class PassengerResponse(PassengerBase):
    """Schema for passenger response."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CascadeDeleteResponse(BaseModel):
    """Result of deleting a passenger together with their trips."""
    message: str = "Passenger deleted successfully"
    trips_deleted: int
