"""
Trip lookup and per-user ordering.
"""
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from logistics.core.exceptions import NotFoundError
from logistics.db.operations import store_operation
from logistics.models.trip import Trip


def get_trip(trip_id: int, db: Session) -> Trip:
    """Load a trip fresh from the database or raise NotFoundError."""
    trip = db.get(Trip, trip_id, populate_existing=True)
    if trip is None:
        raise NotFoundError("Trip not found")
    return trip


def sort_key_for_user(user_id: int):
    """Trips with a position for this user come first, by position, then by id."""
    key = str(user_id)

    def _key(trip: Trip):
        orders = trip.sort_orders or {}
        if key in orders:
            return (0, orders[key], trip.id)
        return (1, 0, trip.id)

    return _key


@store_operation
def list_trips_for_user(user_id: int, db: Session) -> List[Trip]:
    trips = db.execute(select(Trip)).scalars().all()
    return sorted(trips, key=sort_key_for_user(user_id))


@store_operation
def set_sort_order(trip_id: int, user_id: int, sort_order: int, db: Session) -> Trip:
    """Record where ``user_id`` wants this trip listed."""
    trip = get_trip(trip_id, db)
    orders = dict(trip.sort_orders or {})
    orders[str(user_id)] = sort_order
    # JSON columns are not mutation-tracked; assign a new dict
    trip.sort_orders = orders
    db.commit()
    db.refresh(trip)
    return trip
