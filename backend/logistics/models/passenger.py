"""
Passenger model.
"""
from sqlalchemy import Column, String
from logistics.db.base import BaseModel


class Passenger(BaseModel):
    """A person who can be booked on trips."""
    __tablename__ = "passengers"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    job_role = Column(String(100), nullable=True)
