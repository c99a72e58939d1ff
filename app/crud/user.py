from typing import Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from app.core.security import verify_password
from app.models.user import User

class CRUDUser:
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            return None
        user.last_login = datetime.now(timezone.utc)
        db.commit()
        return user

user = CRUDUser()
