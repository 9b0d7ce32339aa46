"""
Pydantic schemas for Site entity.
"""
from pydantic import BaseModel, StrictInt
from datetime import datetime


class SiteResponse(BaseModel):
    """Schema for site response."""
    id: int
    site_name: str
    current_pob: int
    maximum_pob: int
    pob_updated_date: datetime

    class Config:
        from_attributes = True


class POBUpdate(BaseModel):
    """Body for a manual POB update. Range is checked by the service."""
    current_pob: StrictInt
