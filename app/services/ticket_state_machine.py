"""Ticket lifecycle: leg completion flags, status transitions and status history."""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    AlreadyProcessed,
    DeparturePending,
    InvalidTransition,
    MissingReturnLeg,
)
from app.models.ticket import Ticket, TicketStatus, TicketStatusChange, TERMINAL_TICKET_STATUSES

logger = logging.getLogger(__name__)


def leg_name(is_return: bool) -> str:
    return "return" if is_return else "departure"


class TicketStateMachine:
    """
    Owns every write to a ticket's status and completion flags.

    Pending -> Active -> Completed as legs are generated, Cancelled from any
    non-terminal state. Delayed, Rescheduled, Used, Expired and Confirmed are
    set by staff and do not affect leg generation.
    """

    def status_after_leg(self, ticket: Ticket, is_return: bool) -> TicketStatus:
        if is_return or not ticket.has_return:
            return TicketStatus.COMPLETED
        return TicketStatus.ACTIVE

    def check_leg_preconditions(self, ticket: Ticket, is_return: bool) -> None:
        """Raise the first violated precondition for generating the given leg."""
        if ticket.status == TicketStatus.CANCELLED:
            raise InvalidTransition(ticket.status.value, f"{leg_name(is_return)} flight")

        if is_return:
            if not ticket.has_return or ticket.return_date is None:
                raise MissingReturnLeg(ticket.id)
            if ticket.return_completed:
                raise AlreadyProcessed(ticket.id, "return")
            if not ticket.departure_completed:
                raise DeparturePending(ticket.id)
        elif ticket.departure_completed:
            raise AlreadyProcessed(ticket.id, "departure")

    def claim_leg(self, db: Session, ticket: Ticket, is_return: bool) -> TicketStatus:
        """
        Mark a leg completed with a single conditional UPDATE.

        The WHERE clause repeats the preconditions, so of two concurrent
        requests for the same leg only one updates a row. The loser gets
        AlreadyProcessed. Nothing is committed here.
        """
        self.check_leg_preconditions(ticket, is_return)

        new_status = self.status_after_leg(ticket, is_return)
        query = db.query(Ticket).filter(
            Ticket.id == ticket.id,
            Ticket.status != TicketStatus.CANCELLED,
        )
        if is_return:
            query = query.filter(
                Ticket.has_return == True,  # noqa: E712
                Ticket.departure_completed == True,  # noqa: E712
                Ticket.return_completed == False,  # noqa: E712
            )
            values = {Ticket.return_completed: True, Ticket.status: new_status}
        else:
            query = query.filter(Ticket.departure_completed == False)  # noqa: E712
            values = {Ticket.departure_completed: True, Ticket.status: new_status}

        claimed = query.update(values, synchronize_session=False)
        if claimed == 0:
            logger.warning(f"Lost race claiming {leg_name(is_return)} leg of ticket {ticket.id}")
            raise AlreadyProcessed(ticket.id, leg_name(is_return))

        previous_status = ticket.status
        db.refresh(ticket)
        logger.info(
            f"Ticket {ticket.reference}: {leg_name(is_return)} leg completed, "
            f"status {previous_status.value} -> {new_status.value}"
        )
        return previous_status

    def record_change(
        self,
        db: Session,
        ticket: Ticket,
        previous_status: Optional[TicketStatus],
        new_status: TicketStatus,
        note: Optional[str] = None,
        changed_by: Optional[str] = None,
    ) -> TicketStatusChange:
        change = TicketStatusChange(
            ticket_id=ticket.id,
            changed_at=datetime.now(timezone.utc),
            previous_status=previous_status,
            new_status=new_status,
            note=note,
            changed_by=changed_by,
        )
        db.add(change)
        return change

    def change_status(
        self,
        db: Session,
        ticket: Ticket,
        new_status: TicketStatus,
        note: Optional[str] = None,
        changed_by: Optional[str] = None,
    ) -> Ticket:
        """Explicit staff transition. Every change is kept in the status history."""
        current = ticket.status
        if new_status == TicketStatus.CANCELLED and current in TERMINAL_TICKET_STATUSES:
            raise InvalidTransition(current.value, new_status.value)
        if new_status == TicketStatus.PENDING and ticket.has_generated_leg:
            raise InvalidTransition(current.value, new_status.value)

        self.record_change(db, ticket, current, new_status, note=note, changed_by=changed_by)
        ticket.status = new_status
        db.commit()
        db.refresh(ticket)

        logger.info(f"Ticket {ticket.reference} status changed from {current.value} to {new_status.value}")
        return ticket


# Singleton instance
ticket_state_machine = TicketStateMachine()
