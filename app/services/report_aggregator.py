"""Read model gathering one employee's travel activity for a date window."""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationFailed
from app.models.employee import Employee
from app.models.flight import Flight
from app.models.money_transfer import MoneyTransfer
from app.models.passport import Passport
from app.models.ticket import Ticket, TicketStatus

logger = logging.getLogger(__name__)


class ReportAggregator:
    """Pure read: never writes to the session it is given."""

    def pending_legs(self, tickets: List[Ticket]) -> int:
        pending = 0
        for ticket in tickets:
            if ticket.status == TicketStatus.CANCELLED:
                continue
            if not ticket.departure_completed:
                pending += 1
            if ticket.has_return and not ticket.return_completed:
                pending += 1
        return pending

    def summarize(
        self,
        flights: List[Flight],
        tickets: List[Ticket],
        transfers: List[MoneyTransfer],
        start_date: date,
        end_date: date,
    ) -> Dict[str, Any]:
        total_amount = Decimal("0")
        currencies: List[str] = []
        for transfer in transfers:
            total_amount += Decimal(str(transfer.amount or 0))
            if transfer.currency and transfer.currency not in currencies:
                currencies.append(transfer.currency)

        destinations: List[str] = []
        for flight in flights:
            if flight.destination not in destinations:
                destinations.append(flight.destination)

        return {
            "total_flights": len(flights),
            "total_transfers": len(transfers),
            "total_transfer_amount": total_amount,
            "currencies": currencies,
            "destinations": destinations,
            "pending_legs": self.pending_legs(tickets),
            "period": {"start_date": start_date, "end_date": end_date},
        }

    def employee_report(self, db: Session, employee_id: str, start_date: date, end_date: date) -> Dict[str, Any]:
        if start_date > end_date:
            raise ValidationFailed("start_date cannot be after end_date", ["start_date", "end_date"])

        employee = db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFound("Employee", employee_id)

        passport = db.query(Passport).filter(Passport.employee_id == employee_id).first()

        flights = db.query(Flight).filter(
            Flight.employee_id == employee_id,
            Flight.departure_date >= start_date,
            Flight.departure_date <= end_date,
        ).order_by(Flight.departure_date).all()

        tickets = db.query(Ticket).filter(
            Ticket.employee_id == employee_id,
            Ticket.departure_date >= start_date,
            Ticket.departure_date <= end_date,
        ).order_by(Ticket.departure_date).all()

        transfers = db.query(MoneyTransfer).filter(
            MoneyTransfer.employee_id == employee_id,
            MoneyTransfer.date >= start_date,
            MoneyTransfer.date <= end_date,
        ).order_by(MoneyTransfer.date).all()

        visa_destinations = []
        seen = set()
        for flight in flights:
            key = (flight.destination, flight.type)
            if key not in seen:
                seen.add(key)
                visa_destinations.append({"destination": flight.destination, "type": flight.type})

        logger.info(
            f"Report for employee {employee_id} ({start_date} to {end_date}): "
            f"{len(flights)} flights, {len(tickets)} tickets, {len(transfers)} transfers"
        )

        return {
            "report_period": {"start_date": start_date, "end_date": end_date},
            "employee": employee,
            "passport": passport,
            "flights": flights,
            "tickets": tickets,
            "transfers": transfers,
            "visa_destinations": visa_destinations,
            "generated_at": datetime.now(timezone.utc),
            "summary": self.summarize(flights, tickets, transfers, start_date, end_date),
        }


# Singleton instance
report_aggregator = ReportAggregator()
