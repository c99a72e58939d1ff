from sqlalchemy import Column, String, Date, ForeignKey, Text, Numeric
from app.models.base import BaseModel

class MoneyTransfer(BaseModel):
    __tablename__ = "money_transfers"

    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    date = Column(Date, nullable=False)
    recipient_name = Column(String(255), nullable=True)
    bank_name = Column(String(255), nullable=True)
    status = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
