import uuid
from sqlalchemy import Column, String, Date, ForeignKey, Text, Enum, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.config import settings
from app.models.base import BaseModel
import enum

class FlightStatus(enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    DELAYED = "Delayed"


def generate_flight_id() -> str:
    return f"{settings.FLIGHT_ID_PREFIX}{uuid.uuid4().hex[:8].upper()}"


class Flight(BaseModel):
    __tablename__ = "flights"
    # At most one departure and one return flight per ticket
    __table_args__ = (
        UniqueConstraint("ticket_id", "is_return", name="uq_flights_ticket_leg"),
    )

    id = Column(String(36), primary_key=True, index=True, default=generate_flight_id)
    ticket_id = Column(String(36), ForeignKey("tickets.id"), nullable=True, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    airline_id = Column(String(36), ForeignKey("airlines.id"), nullable=False)

    departure_date = Column(Date, nullable=False)
    origin = Column(String(100), nullable=False)
    destination = Column(String(100), nullable=False)
    ticket_reference = Column(String(50), nullable=True)
    flight_number = Column(String(50), nullable=True)
    is_return = Column(Boolean, nullable=False, default=False)
    status = Column(Enum(FlightStatus), nullable=False, default=FlightStatus.PENDING)
    type = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    ticket = relationship("Ticket", back_populates="flights")
    employee = relationship("Employee")
    airline = relationship("Airline")

    @property
    def employee_name(self):
        return self.employee.name if self.employee else None

    @property
    def airline_name(self):
        return self.airline.name if self.airline else None

    @property
    def leg(self) -> str:
        return "return" if self.is_return else "departure"
