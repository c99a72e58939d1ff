import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_active_user
from app.core.security import create_access_token
from app.db.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=schemas.Token)
def login(
    *,
    db: Session = Depends(get_db),
    login_in: schemas.LoginRequest
) -> Any:
    user = crud.user.authenticate(db, email=login_in.email, password=login_in.password)
    if not user:
        logger.warning(f"Failed login attempt for {login_in.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    return {
        "access_token": create_access_token(user.email, role=user.role.value),
        "token_type": "bearer",
    }

@router.get("/me", response_model=schemas.User)
def read_current_user(
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return current_user
