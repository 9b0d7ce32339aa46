"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from logistics.core.exceptions import NotFoundError
from logistics.db.session import get_db
from logistics.models.user import User
from logistics.models.trip import Trip
from logistics.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, PassengerCountSet, SortOrderUpdate
)
from logistics.services.trip_service import get_trip, list_trips_for_user, set_sort_order
from logistics.services.passenger_count_service import (
    increment_passengers, decrement_passengers, set_passengers, confirm_trip
)
from logistics.api.dependencies import get_current_user

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip. The passenger id is not checked against passengers."""
    new_trip = Trip(**trip_data.model_dump())
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    return new_trip


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips in the current user's sort order."""
    return list_trips_for_user(current_user.id, db)


@router.get("/passenger/{passenger_id}", response_model=List[TripResponse])
async def list_trips_for_passenger(
    passenger_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trips by passenger ID."""
    trips = db.query(Trip).filter(Trip.passenger_id == passenger_id).order_by(Trip.trip_date, Trip.id).all()
    if not trips:
        raise NotFoundError("No trips found for this passenger")
    return trips


@router.get("/{trip_id}", response_model=TripResponse)
async def read_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip by ID."""
    return get_trip(trip_id, db)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace a trip's details."""
    trip = get_trip(trip_id, db)
    for field, value in trip_data.model_dump().items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete trip by ID."""
    trip = get_trip(trip_id, db)
    db.delete(trip)
    db.commit()
    return {"message": "Trip deleted successfully"}


@router.patch("/{trip_id}/passengers/increment", response_model=TripResponse)
async def increment_trip_passengers(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add one passenger to the trip."""
    return increment_passengers(trip_id, db)


@router.patch("/{trip_id}/passengers/decrement", response_model=TripResponse)
async def decrement_trip_passengers(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove one passenger from the trip. The count never drops below 1."""
    return decrement_passengers(trip_id, db)


@router.patch("/{trip_id}/passengers/set", response_model=TripResponse)
async def set_trip_passengers(
    trip_id: int,
    body: PassengerCountSet,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set the trip's passenger count."""
    return set_passengers(trip_id, body.number_of_passengers, db)


@router.patch("/{trip_id}/confirm", response_model=TripResponse)
async def confirm(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Confirm the trip."""
    return confirm_trip(trip_id, db)


@router.patch("/{trip_id}/sort-order", response_model=TripResponse)
async def update_sort_order(
    trip_id: int,
    body: SortOrderUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set where this trip appears in the current user's list."""
    return set_sort_order(trip_id, current_user.id, body.sort_order, db)
