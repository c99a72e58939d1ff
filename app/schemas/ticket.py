from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from app.models.ticket import TicketStatus

TICKET_STATUS_VALUES = [s.value for s in TicketStatus]

class TicketBase(BaseModel):
    employee_id: str = Field(..., min_length=1)
    airline_id: str = Field(..., min_length=1)
    reference: str = Field(..., min_length=1, max_length=50)
    origin: str = Field(..., min_length=1, max_length=100)
    destination: str = Field(..., min_length=1, max_length=100)
    departure_date: date
    return_date: Optional[date] = None
    cost: Optional[Decimal] = None
    currency: Optional[str] = Field(None, max_length=3)
    booking_reference: Optional[str] = None
    flight_number: Optional[str] = None
    type: Optional[str] = "Business"
    notes: Optional[str] = None

class TicketCreate(TicketBase):
    pass

class TicketUpdate(BaseModel):
    airline_id: Optional[str] = None
    departure_date: Optional[date] = None
    return_date: Optional[date] = None
    cost: Optional[Decimal] = None
    currency: Optional[str] = Field(None, max_length=3)
    booking_reference: Optional[str] = None
    flight_number: Optional[str] = None
    type: Optional[str] = None
    notes: Optional[str] = None

class TicketStatusUpdate(BaseModel):
    status: TicketStatus
    notes: Optional[str] = None

    @field_validator('status', mode='before')
    @classmethod
    def check_status(cls, v):
        if isinstance(v, TicketStatus):
            return v
        if v not in TICKET_STATUS_VALUES:
            raise ValueError(f"status must be one of: {', '.join(TICKET_STATUS_VALUES)}")
        return v

class CreateFlightRequest(BaseModel):
    is_return: bool = Field(False, alias="isReturn")

    class Config:
        populate_by_name = True

class TicketStatusChange(BaseModel):
    changed_at: datetime
    previous_status: Optional[TicketStatus] = None
    new_status: TicketStatus
    note: Optional[str] = None
    changed_by: Optional[str] = None

    class Config:
        from_attributes = True

class Ticket(TicketBase):
    id: str
    currency: str
    status: TicketStatus
    has_return: bool
    departure_completed: bool
    return_completed: bool
    departure_flight_id: Optional[str] = None
    return_flight_id: Optional[str] = None
    employee_name: Optional[str] = None
    airline_name: Optional[str] = None
    status_history: List[TicketStatusChange] = []
    status_log: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
