"""
Passenger-count rules for trips.

Counter changes are single conditional UPDATE statements so concurrent
calls on the same trip never lose an update. A trip's count, when set,
never drops below 1.
"""
import logging
from typing import Any
from sqlalchemy import update
from sqlalchemy.orm import Session
from logistics.core.exceptions import InvalidInputError, InvalidStateError
from logistics.core.utils import is_strict_int
from logistics.db.operations import store_operation
from logistics.models.trip import Trip
from logistics.services.trip_service import get_trip

logger = logging.getLogger(__name__)

MIN_PASSENGERS = 1


def _apply(db: Session, stmt) -> int:
    return db.execute(stmt.execution_options(synchronize_session=False)).rowcount


@store_operation
def increment_passengers(trip_id: int, db: Session) -> Trip:
    """Add one passenger. The trip must already have a count."""
    updated = _apply(
        db,
        update(Trip)
        .where(Trip.id == trip_id, Trip.number_of_passengers.isnot(None))
        .values(number_of_passengers=Trip.number_of_passengers + 1),
    )
    if not updated:
        db.rollback()
        get_trip(trip_id, db)
        raise InvalidStateError("Trip has no passenger count to increment")

    db.commit()
    trip = get_trip(trip_id, db)
    logger.info(f"Trip {trip_id} passengers incremented to {trip.number_of_passengers}")
    return trip


@store_operation
def decrement_passengers(trip_id: int, db: Session) -> Trip:
    """Remove one passenger, refusing to go below 1."""
    updated = _apply(
        db,
        update(Trip)
        .where(Trip.id == trip_id, Trip.number_of_passengers > MIN_PASSENGERS)
        .values(number_of_passengers=Trip.number_of_passengers - 1),
    )
    if not updated:
        db.rollback()
        trip = get_trip(trip_id, db)
        if trip.number_of_passengers is None:
            raise InvalidStateError("Trip has no passenger count to decrement")
        raise InvalidStateError(f"Number of passengers cannot go below {MIN_PASSENGERS}")

    db.commit()
    trip = get_trip(trip_id, db)
    logger.info(f"Trip {trip_id} passengers decremented to {trip.number_of_passengers}")
    return trip


@store_operation
def set_passengers(trip_id: int, value: Any, db: Session) -> Trip:
    """Overwrite the passenger count with a positive integer."""
    if not is_strict_int(value) or value < MIN_PASSENGERS:
        raise InvalidInputError("number_of_passengers must be a positive integer")

    updated = _apply(
        db,
        update(Trip).where(Trip.id == trip_id).values(number_of_passengers=value),
    )
    if not updated:
        db.rollback()
        get_trip(trip_id, db)

    db.commit()
    logger.info(f"Trip {trip_id} passengers set to {value}")
    return get_trip(trip_id, db)


@store_operation
def confirm_trip(trip_id: int, db: Session) -> Trip:
    """Mark a trip confirmed. Confirming twice is a no-op; there is no unconfirm."""
    updated = _apply(
        db,
        update(Trip).where(Trip.id == trip_id).values(confirmed=True),
    )
    if not updated:
        db.rollback()
        get_trip(trip_id, db)

    db.commit()
    logger.info(f"Trip {trip_id} confirmed")
    return get_trip(trip_id, db)
