"""
Passenger deletion with dependent trips.
"""
import logging
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from logistics.core.exceptions import NotFoundError, PartialFailureError
from logistics.db.operations import store_operation
from logistics.models.passenger import Passenger
from logistics.models.trip import Trip

logger = logging.getLogger(__name__)


def get_passenger(passenger_id: int, db: Session) -> Passenger:
    passenger = db.get(Passenger, passenger_id, populate_existing=True)
    if passenger is None:
        raise NotFoundError("Passenger not found")
    return passenger


def _delete_trips(passenger_id: int, db: Session) -> int:
    stmt = delete(Trip).where(Trip.passenger_id == passenger_id)
    return db.execute(stmt.execution_options(synchronize_session=False)).rowcount


def _delete_passenger_row(passenger_id: int, db: Session) -> None:
    stmt = delete(Passenger).where(Passenger.id == passenger_id)
    db.execute(stmt.execution_options(synchronize_session=False))


@store_operation
def delete_passenger_cascade(passenger_id: int, db: Session) -> dict:
    """
    Delete a passenger and every trip that references it.

    Trips go first so no trip is ever left pointing at a missing passenger.
    Both deletes share one transaction. If the passenger delete fails after
    the trips were removed, the transaction is rolled back and a retryable
    PartialFailureError is raised.

    Returns:
        {"trips_deleted": <count>}
    """
    get_passenger(passenger_id, db)

    trips_deleted = _delete_trips(passenger_id, db)
    try:
        _delete_passenger_row(passenger_id, db)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Cascade delete of passenger {passenger_id} failed after removing "
            f"{trips_deleted} trips; rolled back: {e}"
        )
        raise PartialFailureError(
            "Passenger could not be deleted after its trips were removed; the change was rolled back, retry the request",
            details={"trips_deleted": trips_deleted, "retryable": True},
        ) from e

    logger.info(f"Deleted passenger {passenger_id} and {trips_deleted} trips")
    return {"trips_deleted": trips_deleted}
