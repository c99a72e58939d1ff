from typing import Optional
from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from app.models.employee_visa import VisaStatus

class EmployeeVisaBase(BaseModel):
    employee_id: str = Field(..., min_length=1)
    visa_type_id: str = Field(..., min_length=1)
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    status: VisaStatus = VisaStatus.VALID
    document_number: Optional[str] = None
    notes: Optional[str] = None

class EmployeeVisaCreate(EmployeeVisaBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.issue_date and self.expiry_date and self.expiry_date < self.issue_date:
            raise ValueError("expiry_date cannot be before issue_date")
        return self

class EmployeeVisaUpdate(BaseModel):
    employee_id: Optional[str] = None
    visa_type_id: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    status: Optional[VisaStatus] = None
    document_number: Optional[str] = None
    notes: Optional[str] = None

class EmployeeVisa(EmployeeVisaBase):
    id: str
    expiry_date: date
    employee_name: Optional[str] = None
    visa_type_name: Optional[str] = None
    country_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
