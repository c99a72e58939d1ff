from typing import Optional
from pydantic import BaseModel
from datetime import date, datetime
from app.models.flight import FlightStatus
from app.schemas.ticket import Ticket

class FlightUpdate(BaseModel):
    status: Optional[FlightStatus] = None
    flight_number: Optional[str] = None
    notes: Optional[str] = None

class Flight(BaseModel):
    id: str
    ticket_id: Optional[str] = None
    employee_id: str
    employee_name: Optional[str] = None
    airline_id: str
    airline_name: Optional[str] = None
    departure_date: date
    origin: str
    destination: str
    ticket_reference: Optional[str] = None
    flight_number: Optional[str] = None
    is_return: bool
    status: FlightStatus
    type: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FlightCreated(BaseModel):
    message: str
    flight: Flight
    ticket: Ticket
