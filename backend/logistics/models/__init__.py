"""Models package - Import all models for SQLAlchemy registration."""
from logistics.models.user import User, UserToken
from logistics.models.passenger import Passenger
from logistics.models.trip import Trip
from logistics.models.site import Site

__all__ = [
    "User",
    "UserToken",
    "Passenger",
    "Trip",
    "Site",
]
