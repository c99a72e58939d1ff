"""Generation of flight records from ticket legs."""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InconsistentStateError, NotFound, PreconditionViolation
from app.models.flight import Flight, FlightStatus, generate_flight_id
from app.models.ticket import Ticket, TicketStatus
from app.services.ticket_state_machine import leg_name, ticket_state_machine

logger = logging.getLogger(__name__)


class FlightGenerator:
    """
    Turns one leg of a ticket into an immutable flight record.

    The leg claim, the flight insert, the ticket's forward reference and the
    status history row are written in one transaction.
    """

    def build_flight(self, ticket: Ticket, is_return: bool) -> Flight:
        if is_return:
            # The return flies the reverse route
            origin, destination = ticket.destination, ticket.origin
            departure_date = ticket.return_date
        else:
            origin, destination = ticket.origin, ticket.destination
            departure_date = ticket.departure_date

        leg = leg_name(is_return)
        return Flight(
            id=generate_flight_id(),
            ticket_id=ticket.id,
            employee_id=ticket.employee_id,
            airline_id=ticket.airline_id,
            departure_date=departure_date,
            origin=origin,
            destination=destination,
            ticket_reference=ticket.reference,
            flight_number=ticket.flight_number,
            is_return=is_return,
            status=FlightStatus.PENDING,
            type=ticket.type,
            notes=f"Auto-generated {leg} flight from ticket {ticket.reference}",
        )

    def generate_flight(
        self,
        db: Session,
        ticket_id: str,
        is_return: bool,
        generated_by: Optional[str] = None,
    ) -> Tuple[Flight, Ticket]:
        ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
        if not ticket:
            raise NotFound("Ticket", ticket_id)

        leg = leg_name(is_return)
        try:
            previous_status = ticket_state_machine.claim_leg(db, ticket, is_return)
        except PreconditionViolation:
            db.rollback()
            raise

        flight = self.build_flight(ticket, is_return)
        try:
            db.add(flight)
            db.flush()
            self._attach_flight(db, ticket, flight, is_return, previous_status, generated_by)
            db.commit()
        except SQLAlchemyError:
            logger.exception(f"Failed to generate {leg} flight for ticket {ticket_id}")
            db.rollback()
            self.reconcile(db, ticket_id, is_return)
            raise

        db.refresh(ticket)
        db.refresh(flight)
        logger.info(f"Generated {leg} flight {flight.id} from ticket {ticket.reference}")
        return flight, ticket

    def _attach_flight(
        self,
        db: Session,
        ticket: Ticket,
        flight: Flight,
        is_return: bool,
        previous_status: TicketStatus,
        generated_by: Optional[str],
    ) -> None:
        if is_return:
            ticket.return_flight_id = flight.id
        else:
            ticket.departure_flight_id = flight.id

        ticket_state_machine.record_change(
            db,
            ticket,
            previous_status,
            ticket.status,
            note=f"{leg_name(is_return).capitalize()} flight {flight.id} generated",
            changed_by=generated_by,
        )
        db.flush()

    def find_inconsistency(self, db: Session, ticket_id: str, is_return: bool) -> Tuple[bool, Optional[str]]:
        """
        Compare a ticket leg with the flights table.

        Returns (inconsistent, flight_id). A flight without the completion
        flag or forward reference is inconsistent, and so is a forward
        reference to a flight that does not exist.
        """
        ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
        if not ticket:
            return False, None

        flight = db.query(Flight).filter(
            Flight.ticket_id == ticket_id,
            Flight.is_return == is_return,
        ).first()
        completed = ticket.return_completed if is_return else ticket.departure_completed
        linked_id = ticket.return_flight_id if is_return else ticket.departure_flight_id

        if flight and (not completed or linked_id != flight.id):
            return True, flight.id
        if completed and not flight and linked_id:
            return True, linked_id
        return False, None

    def reconcile(self, db: Session, ticket_id: str, is_return: bool) -> None:
        """Raise InconsistentStateError if a failed generation left a half-written leg."""
        leg = leg_name(is_return)
        try:
            inconsistent, flight_id = self.find_inconsistency(db, ticket_id, is_return)
        except SQLAlchemyError:
            logger.critical(f"Could not verify {leg} leg of ticket {ticket_id} after a failed generation")
            raise InconsistentStateError(ticket_id, leg)

        if inconsistent:
            logger.critical(
                f"Ticket {ticket_id} {leg} leg is inconsistent with flight {flight_id}; "
                "manual reconciliation required"
            )
            raise InconsistentStateError(ticket_id, leg, flight_id)


# Singleton instance
flight_generator = FlightGenerator()
