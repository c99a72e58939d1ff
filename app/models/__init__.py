from .base import BaseModel
from .user import User, UserRole
from .employee import Employee
from .airline import Airline
from .passport import Passport
from .money_transfer import MoneyTransfer
from .visa_type import VisaType, VisaDuration, DurationUnit
from .employee_visa import EmployeeVisa, VisaStatus
from .ticket import Ticket, TicketStatus, TicketStatusChange
from .flight import Flight, FlightStatus

__all__ = [
    "BaseModel", "User", "UserRole", "Employee", "Airline", "Passport", "MoneyTransfer",
    "VisaType", "VisaDuration", "DurationUnit", "EmployeeVisa", "VisaStatus",
    "Ticket", "TicketStatus", "TicketStatusChange", "Flight", "FlightStatus",
]
