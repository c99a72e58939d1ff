from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_active_user
from app.core.permissions import require_travel_manager
from app.db.database import get_db
from app.models.user import User

router = APIRouter()

def get_flight_or_404(db: Session, flight_id: str):
    flight = crud.flight.get(db, id=flight_id)
    if not flight:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flight not found"
        )
    return flight

@router.get("/", response_model=List[schemas.Flight])
def get_flights(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.flight.get_multi_ordered(db, skip=skip, limit=limit)

@router.get("/employee/{employee_id}", response_model=List[schemas.Flight])
def get_employee_flights(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.flight.get_by_employee(db, employee_id=employee_id)

@router.get("/ticket/{ticket_id}", response_model=List[schemas.Flight])
def get_ticket_flights(
    ticket_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.flight.get_by_ticket(db, ticket_id=ticket_id)

@router.get("/{flight_id}", response_model=schemas.Flight)
def get_flight(
    flight_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return get_flight_or_404(db, flight_id)

@router.put("/{flight_id}", response_model=schemas.Flight)
def update_flight(
    *,
    db: Session = Depends(get_db),
    flight_id: str,
    flight_in: schemas.FlightUpdate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Update status, flight number or notes; the generated route is fixed"""
    flight = get_flight_or_404(db, flight_id)
    update_data = {k: v for k, v in flight_in.dict(exclude_unset=True).items() if k != "status" or v is not None}
    return crud.flight.update(db, db_obj=flight, obj_in=update_data)

@router.delete("/{flight_id}")
def delete_flight(
    *,
    db: Session = Depends(get_db),
    flight_id: str,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    flight = get_flight_or_404(db, flight_id)
    crud.flight.remove_flight(db, db_obj=flight)
    return {"message": "Flight deleted successfully", "id": flight_id}
