from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Text, Enum, Boolean, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.models.base import BaseModel
import enum

class TicketStatus(enum.Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    DELAYED = "Delayed"
    RESCHEDULED = "Rescheduled"
    USED = "Used"
    EXPIRED = "Expired"
    CONFIRMED = "Confirmed"

TERMINAL_TICKET_STATUSES = (TicketStatus.COMPLETED, TicketStatus.CANCELLED)

class Ticket(BaseModel):
    __tablename__ = "tickets"

    reference = Column(String(50), nullable=False, unique=True, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    airline_id = Column(String(36), ForeignKey("airlines.id"), nullable=False)

    origin = Column(String(100), nullable=False)
    destination = Column(String(100), nullable=False)
    departure_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=True)

    cost = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    booking_reference = Column(String(100), nullable=True)
    flight_number = Column(String(50), nullable=True)
    type = Column(String(50), nullable=True, default="Business")

    status = Column(Enum(TicketStatus), nullable=False, default=TicketStatus.PENDING)
    has_return = Column(Boolean, nullable=False, default=False)
    departure_completed = Column(Boolean, nullable=False, default=False)
    return_completed = Column(Boolean, nullable=False, default=False)

    # Forward references to generated flights
    departure_flight_id = Column(String(36), nullable=True)
    return_flight_id = Column(String(36), nullable=True)

    notes = Column(Text, nullable=True)

    # Relationships
    employee = relationship("Employee", back_populates="tickets")
    airline = relationship("Airline")
    flights = relationship("Flight", back_populates="ticket")
    status_history = relationship(
        "TicketStatusChange",
        back_populates="ticket",
        order_by="TicketStatusChange.changed_at",
        cascade="all, delete-orphan",
    )

    @property
    def employee_name(self):
        return self.employee.name if self.employee else None

    @property
    def airline_name(self):
        return self.airline.name if self.airline else None

    @property
    def has_generated_leg(self) -> bool:
        return bool(self.departure_completed or self.return_completed)

    @property
    def status_log(self) -> str:
        return "\n".join(change.as_log_line() for change in self.status_history)


class TicketStatusChange(BaseModel):
    __tablename__ = "ticket_status_changes"

    ticket_id = Column(String(36), ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False, index=True)
    changed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    previous_status = Column(Enum(TicketStatus), nullable=True)
    new_status = Column(Enum(TicketStatus), nullable=False)
    note = Column(Text, nullable=True)
    changed_by = Column(String(255), nullable=True)

    # Relationships
    ticket = relationship("Ticket", back_populates="status_history")

    def as_log_line(self) -> str:
        previous = self.previous_status.value if self.previous_status else "None"
        line = f"[{self.changed_at.isoformat()}] Status changed from {previous} to {self.new_status.value}"
        if self.note:
            line += f": {self.note}"
        return line
