import logging
from typing import List, Optional
from sqlalchemy import or_, and_
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import NotFound, TicketLocked, ValidationFailed
from app.crud.base import CRUDBase
from app.models.airline import Airline
from app.models.base import generate_uuid
from app.models.employee import Employee
from app.models.flight import Flight
from app.models.ticket import Ticket, TicketStatus
from app.schemas.ticket import TicketCreate, TicketUpdate
from app.services.ticket_state_machine import ticket_state_machine

logger = logging.getLogger(__name__)

# Editable ticket columns that are NOT NULL in the table
NON_NULLABLE_DETAILS = ("airline_id", "currency")

class CRUDTicket(CRUDBase[Ticket, TicketCreate, TicketUpdate]):
    def get_multi_filtered(
        self, db: Session, *, status: Optional[TicketStatus] = None, skip: int = 0, limit: int = 100
    ) -> List[Ticket]:
        query = db.query(Ticket)
        if status:
            query = query.filter(Ticket.status == status)
        return query.order_by(Ticket.created_at.desc()).offset(skip).limit(limit).all()

    def get_by_reference(self, db: Session, *, reference: str) -> Optional[Ticket]:
        return db.query(Ticket).filter(Ticket.reference == reference).first()

    def get_by_employee(self, db: Session, *, employee_id: str) -> List[Ticket]:
        return db.query(Ticket).filter(
            Ticket.employee_id == employee_id
        ).order_by(Ticket.departure_date.desc()).all()

    def get_pending(self, db: Session) -> List[Ticket]:
        """Tickets with at least one leg still waiting for its flight."""
        return db.query(Ticket).filter(
            Ticket.status != TicketStatus.CANCELLED,
            or_(
                Ticket.departure_completed == False,  # noqa: E712
                and_(Ticket.has_return == True, Ticket.return_completed == False),  # noqa: E712
            )
        ).order_by(Ticket.departure_date.asc()).all()

    def create_ticket(self, db: Session, *, obj_in: TicketCreate, created_by: Optional[str] = None) -> Ticket:
        if not db.query(Employee).filter(Employee.id == obj_in.employee_id).first():
            raise NotFound("Employee", obj_in.employee_id)
        if not db.query(Airline).filter(Airline.id == obj_in.airline_id).first():
            raise NotFound("Airline", obj_in.airline_id)
        if obj_in.return_date and obj_in.return_date < obj_in.departure_date:
            raise ValidationFailed("return_date cannot be before departure_date", ["return_date"])

        obj_in_data = obj_in.dict()
        obj_in_data["currency"] = obj_in_data.get("currency") or settings.DEFAULT_CURRENCY

        db_obj = Ticket(
            **obj_in_data,
            id=generate_uuid(),
            status=TicketStatus.PENDING,
            has_return=obj_in.return_date is not None,
            departure_completed=False,
            return_completed=False,
        )
        ticket_state_machine.record_change(
            db, db_obj, None, TicketStatus.PENDING, note="Ticket created", changed_by=created_by
        )
        db_obj = self.save(db, db_obj)
        logger.info(f"Created ticket {db_obj.reference} ({'round trip' if db_obj.has_return else 'one way'})")
        return db_obj

    def update_details(self, db: Session, *, db_obj: Ticket, obj_in: TicketUpdate) -> Ticket:
        """Edit descriptive fields; the leg structure and completion flags are not editable."""
        update_data = obj_in.dict(exclude_unset=True)

        for field in NON_NULLABLE_DETAILS:
            if field in update_data and update_data[field] is None:
                raise ValidationFailed(f"{field} cannot be empty", [field])

        if "return_date" in update_data:
            if not db_obj.has_return:
                raise ValidationFailed("A return date cannot be added to a one-way ticket", ["return_date"])
            if update_data["return_date"] is None:
                raise ValidationFailed("The return date of a round-trip ticket cannot be removed", ["return_date"])
            if db_obj.return_completed and update_data["return_date"] != db_obj.return_date:
                raise ValidationFailed("Return date cannot change after the return flight was generated", ["return_date"])

        if "departure_date" in update_data:
            if update_data["departure_date"] is None:
                raise ValidationFailed("Departure date is required", ["departure_date"])
            if db_obj.departure_completed and update_data["departure_date"] != db_obj.departure_date:
                raise ValidationFailed(
                    "Departure date cannot change after the departure flight was generated", ["departure_date"]
                )

        departure = update_data.get("departure_date", db_obj.departure_date)
        return_date = update_data.get("return_date", db_obj.return_date)
        if return_date and return_date < departure:
            raise ValidationFailed("return_date cannot be before departure_date", ["return_date"])

        if update_data.get("airline_id") and not db.query(Airline).filter(Airline.id == update_data["airline_id"]).first():
            raise NotFound("Airline", update_data["airline_id"])

        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def remove_ticket(self, db: Session, *, db_obj: Ticket) -> Ticket:
        """Delete a ticket, refusing once any leg has produced a flight."""
        has_flights = db.query(Flight).filter(Flight.ticket_id == db_obj.id).first() is not None
        if db_obj.has_generated_leg or has_flights:
            raise TicketLocked(db_obj.id)

        db.delete(db_obj)
        db.commit()
        logger.info(f"Deleted ticket {db_obj.reference}")
        return db_obj

ticket = CRUDTicket(Ticket)
