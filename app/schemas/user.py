from typing import Optional
from pydantic import BaseModel
from datetime import datetime
from app.models.user import UserRole

class User(BaseModel):
    id: str
    email: str
    full_name: str
    role: UserRole
    is_active: bool = True
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True
