# File: app/schemas/__init__.py
from .auth import Token, TokenData, LoginRequest
from .user import User
from .ticket import (
    Ticket, TicketCreate, TicketUpdate, TicketStatusUpdate, TicketStatusChange,
    CreateFlightRequest, TICKET_STATUS_VALUES,
)
from .flight import Flight, FlightUpdate, FlightCreated
from .visa_type import VisaType, VisaTypeCreate, VisaTypeUpdate
from .employee_visa import EmployeeVisa, EmployeeVisaCreate, EmployeeVisaUpdate
from .report import (
    EmployeeReport, EmployeeReportRequest, ReportSummary, ReportPeriod,
    EmployeeSummary, PassportSummary, MoneyTransfer, VisaDestination,
)
