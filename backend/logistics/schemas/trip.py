"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, Field, StrictInt
from typing import Optional, Dict
from datetime import date, datetime


class TripBase(BaseModel):
    """Base trip schema."""
    passenger_id: int
    from_origin: str = Field(..., min_length=1)
    to_destination: str = Field(..., min_length=1)
    trip_date: date


class TripCreate(TripBase):
    """Schema for trip creation."""
    number_of_passengers: Optional[StrictInt] = Field(None, ge=1)
    confirmed: bool = False


class TripUpdate(TripBase):
    """
    Schema for full trip update.

    The passenger count and confirmation are only changed through their own
    endpoints, so an update never overwrites them.
    """
    pass


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    number_of_passengers: Optional[int] = None
    confirmed: bool
    sort_orders: Optional[Dict[str, int]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PassengerCountSet(BaseModel):
    """Body for setting the passenger count. Range is checked by the service."""
    number_of_passengers: StrictInt


class SortOrderUpdate(BaseModel):
    """Per-user display position of a trip."""
    sort_order: int
