from sqlalchemy import Column, String, Boolean, Enum, DateTime
from app.models.base import BaseModel
import enum

class UserRole(enum.Enum):
    ADMIN = "admin"
    STAFF = "staff"
    VIEWER = "viewer"

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.VIEWER)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
