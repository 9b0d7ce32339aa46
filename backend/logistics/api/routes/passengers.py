"""
Passenger management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from logistics.db.session import get_db
from logistics.models.user import User
from logistics.models.passenger import Passenger
from logistics.schemas.passenger import (
    PassengerCreate, PassengerUpdate, PassengerResponse, CascadeDeleteResponse
)
from logistics.services.passenger_service import get_passenger, delete_passenger_cascade
from logistics.api.dependencies import get_current_user, get_current_admin

router = APIRouter(prefix="/passengers", tags=["passengers"])


@router.post("", response_model=PassengerResponse, status_code=status.HTTP_201_CREATED)
async def create_passenger(
    passenger_data: PassengerCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a new passenger."""
    passenger = Passenger(**passenger_data.model_dump())
    db.add(passenger)
    db.commit()
    db.refresh(passenger)
    return passenger


@router.get("", response_model=List[PassengerResponse])
async def list_passengers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all passengers."""
    return db.query(Passenger).order_by(Passenger.last_name, Passenger.first_name).all()


@router.get("/{passenger_id}", response_model=PassengerResponse)
async def read_passenger(
    passenger_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get passenger by ID."""
    return get_passenger(passenger_id, db)


@router.put("/{passenger_id}", response_model=PassengerResponse)
async def update_passenger(
    passenger_id: int,
    passenger_data: PassengerUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Replace a passenger's details."""
    passenger = get_passenger(passenger_id, db)
    for field, value in passenger_data.model_dump().items():
        setattr(passenger, field, value)
    db.commit()
    db.refresh(passenger)
    return passenger


@router.delete("/{passenger_id}", response_model=CascadeDeleteResponse)
async def delete_passenger(
    passenger_id: int,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete a passenger and all of their trips."""
    result = delete_passenger_cascade(passenger_id, db)
    return CascadeDeleteResponse(trips_deleted=result["trips_deleted"])
