from sqlalchemy import Column, String, Date, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum

class VisaStatus(enum.Enum):
    VALID = "Valid"
    EXPIRED = "Expired"
    PROCESSING = "Processing"
    CANCELLED = "Cancelled"

class EmployeeVisa(BaseModel):
    __tablename__ = "employee_visas"

    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    visa_type_id = Column(String(36), ForeignKey("visa_types.id"), nullable=False)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=False, index=True)
    status = Column(Enum(VisaStatus), nullable=False, default=VisaStatus.VALID)
    document_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    employee = relationship("Employee", back_populates="visas")
    visa_type = relationship("VisaType", back_populates="visas")

    @property
    def employee_name(self):
        return self.employee.name if self.employee else None

    @property
    def visa_type_name(self):
        return self.visa_type.type if self.visa_type else None

    @property
    def country_name(self):
        return self.visa_type.country_name if self.visa_type else None
