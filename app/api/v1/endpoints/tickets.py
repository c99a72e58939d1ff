from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_active_user
from app.core.permissions import require_travel_manager
from app.db.database import get_db
from app.models.ticket import TicketStatus
from app.models.user import User
from app.services.flight_generator import flight_generator
from app.services.ticket_state_machine import ticket_state_machine

router = APIRouter()

def get_ticket_or_404(db: Session, ticket_id: str):
    ticket = crud.ticket.get(db, id=ticket_id)
    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found"
        )
    return ticket

@router.get("/", response_model=List[schemas.Ticket])
def get_tickets(
    ticket_status: Optional[TicketStatus] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Get all tickets, optionally filtered by status"""
    return crud.ticket.get_multi_filtered(db, status=ticket_status, skip=skip, limit=limit)

@router.get("/pending", response_model=List[schemas.Ticket])
def get_pending_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Get tickets with a leg still waiting for its flight"""
    return crud.ticket.get_pending(db)

@router.get("/reference/{reference}", response_model=schemas.Ticket)
def get_ticket_by_reference(
    reference: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    ticket = crud.ticket.get_by_reference(db, reference=reference)
    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found"
        )
    return ticket

@router.get("/employee/{employee_id}", response_model=List[schemas.Ticket])
def get_employee_tickets(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.ticket.get_by_employee(db, employee_id=employee_id)

@router.get("/{ticket_id}", response_model=schemas.Ticket)
def get_ticket(
    ticket_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return get_ticket_or_404(db, ticket_id)

@router.post("/", response_model=schemas.Ticket, status_code=status.HTTP_201_CREATED)
def create_ticket(
    *,
    db: Session = Depends(get_db),
    ticket_in: schemas.TicketCreate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Create a new ticket in Pending status"""
    return crud.ticket.create_ticket(db, obj_in=ticket_in, created_by=current_user.email)

@router.post(
    "/{ticket_id}/create-flight",
    response_model=schemas.FlightCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_flight_from_ticket(
    *,
    db: Session = Depends(get_db),
    ticket_id: str,
    flight_in: Optional[schemas.CreateFlightRequest] = None,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Generate the departure or return flight of a ticket"""
    is_return = flight_in.is_return if flight_in else False
    flight, ticket = flight_generator.generate_flight(
        db, ticket_id, is_return, generated_by=current_user.email
    )
    leg = "Return" if is_return else "Departure"
    return {
        "message": f"{leg} flight created successfully",
        "flight": flight,
        "ticket": ticket,
    }

@router.put("/{ticket_id}/status", response_model=schemas.Ticket)
def update_ticket_status(
    *,
    db: Session = Depends(get_db),
    ticket_id: str,
    status_in: schemas.TicketStatusUpdate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Change ticket status; the previous status and note are kept in the history"""
    ticket = get_ticket_or_404(db, ticket_id)
    return ticket_state_machine.change_status(
        db, ticket, status_in.status, note=status_in.notes, changed_by=current_user.email
    )

@router.put("/{ticket_id}", response_model=schemas.Ticket)
def update_ticket(
    *,
    db: Session = Depends(get_db),
    ticket_id: str,
    ticket_in: schemas.TicketUpdate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    ticket = get_ticket_or_404(db, ticket_id)
    return crud.ticket.update_details(db, db_obj=ticket, obj_in=ticket_in)

@router.delete("/{ticket_id}")
def delete_ticket(
    *,
    db: Session = Depends(get_db),
    ticket_id: str,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    ticket = get_ticket_or_404(db, ticket_id)
    crud.ticket.remove_ticket(db, db_obj=ticket)
    return {"message": "Ticket deleted successfully"}
