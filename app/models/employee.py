from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

class Employee(BaseModel):
    __tablename__ = "employees"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    department = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    nationality_id = Column(String(36), nullable=True)

    # Relationships
    passport = relationship("Passport", back_populates="employee", uselist=False)
    visas = relationship("EmployeeVisa", back_populates="employee")
    tickets = relationship("Ticket", back_populates="employee")
