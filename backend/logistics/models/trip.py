"""
Trip model for passenger transport between sites.
"""
from sqlalchemy import Column, String, Date, Boolean, Integer, JSON, CheckConstraint
from logistics.db.base import BaseModel


class Trip(BaseModel):
    """Trip booked for a passenger."""
    __tablename__ = "trips"

    # Weak reference: no foreign key, passenger deletion cascades in the service layer
    passenger_id = Column(Integer, nullable=False, index=True)
    from_origin = Column(String(100), nullable=False)
    to_destination = Column(String(100), nullable=False)
    trip_date = Column(Date, nullable=False, index=True)
    confirmed = Column(Boolean, default=False, nullable=False)
    number_of_passengers = Column(Integer, nullable=True)  # None means unspecified
    sort_orders = Column(JSON, nullable=True)  # {str(user_id): order}

    __table_args__ = (
        CheckConstraint(
            "number_of_passengers IS NULL OR number_of_passengers >= 1",
            name="ck_trip_passengers_positive",
        ),
    )
