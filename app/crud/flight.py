import logging
from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.flight import Flight
from app.models.ticket import Ticket
from app.schemas.flight import FlightUpdate

logger = logging.getLogger(__name__)

class CRUDFlight(CRUDBase[Flight, FlightUpdate, FlightUpdate]):
    def get_multi_ordered(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Flight]:
        return db.query(Flight).order_by(Flight.departure_date.desc()).offset(skip).limit(limit).all()

    def get_by_employee(self, db: Session, *, employee_id: str) -> List[Flight]:
        return db.query(Flight).filter(
            Flight.employee_id == employee_id
        ).order_by(Flight.departure_date.desc()).all()

    def get_by_ticket(self, db: Session, *, ticket_id: str) -> List[Flight]:
        return db.query(Flight).filter(
            Flight.ticket_id == ticket_id
        ).order_by(Flight.is_return.asc()).all()

    def remove_flight(self, db: Session, *, db_obj: Flight) -> Flight:
        """
        Delete a flight and clear the ticket's forward reference to it.

        The ticket keeps its completion flag, so the leg is not generated again.
        """
        if db_obj.ticket_id:
            db.query(Ticket).filter(Ticket.departure_flight_id == db_obj.id).update(
                {Ticket.departure_flight_id: None}, synchronize_session="fetch"
            )
            db.query(Ticket).filter(Ticket.return_flight_id == db_obj.id).update(
                {Ticket.return_flight_id: None}, synchronize_session="fetch"
            )
        db.delete(db_obj)
        db.commit()
        logger.info(f"Deleted flight {db_obj.id}")
        return db_obj

flight = CRUDFlight(Flight)
