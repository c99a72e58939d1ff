from typing import Optional, List
from pydantic import BaseModel
from datetime import date, datetime
from decimal import Decimal
from app.schemas.flight import Flight
from app.schemas.ticket import Ticket

class EmployeeReportRequest(BaseModel):
    employee_id: str
    start_date: date
    end_date: date

class ReportPeriod(BaseModel):
    start_date: date
    end_date: date

class EmployeeSummary(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None

    class Config:
        from_attributes = True

class PassportSummary(BaseModel):
    id: str
    passport_number: str
    nationality: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    status: Optional[str] = None

    class Config:
        from_attributes = True

class MoneyTransfer(BaseModel):
    id: str
    amount: Decimal
    currency: str
    date: date
    recipient_name: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class VisaDestination(BaseModel):
    destination: str
    type: Optional[str] = None

class ReportSummary(BaseModel):
    total_flights: int
    total_transfers: int
    total_transfer_amount: Decimal
    currencies: List[str]
    destinations: List[str]
    pending_legs: int
    period: ReportPeriod

class EmployeeReport(BaseModel):
    report_period: ReportPeriod
    employee: EmployeeSummary
    passport: Optional[PassportSummary] = None
    flights: List[Flight] = []
    tickets: List[Ticket] = []
    transfers: List[MoneyTransfer] = []
    visa_destinations: List[VisaDestination] = []
    generated_at: datetime
    summary: ReportSummary
