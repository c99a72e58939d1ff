from sqlalchemy import Column, String, Date, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

class Passport(BaseModel):
    __tablename__ = "passports"

    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, unique=True)
    passport_number = Column(String(50), nullable=False, unique=True)
    nationality = Column(String(100), nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    # Where the physical document is held: With Company, With Employee, With DGM
    status = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    employee = relationship("Employee", back_populates="passport")
