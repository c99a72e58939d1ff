from sqlalchemy import Column, String
from app.models.base import BaseModel

class Airline(BaseModel):
    __tablename__ = "airlines"

    name = Column(String(255), nullable=False)
    code = Column(String(10), nullable=True, unique=True)
    country = Column(String(100), nullable=True)
