from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_active_user
from app.core.permissions import require_travel_manager
from app.db.database import get_db
from app.models.user import User

router = APIRouter()

@router.get("/", response_model=List[schemas.VisaType])
def get_visa_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.visa_type.get_multi_ordered(db)

@router.get("/{visa_type_id}", response_model=schemas.VisaType)
def get_visa_type(
    visa_type_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    visa_type = crud.visa_type.get(db, id=visa_type_id)
    if not visa_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visa type not found"
        )
    return visa_type

@router.post("/", response_model=schemas.VisaType, status_code=status.HTTP_201_CREATED)
def create_visa_type(
    *,
    db: Session = Depends(get_db),
    visa_type_in: schemas.VisaTypeCreate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Create a visa type from a structured duration or legacy duration text"""
    return crud.visa_type.create(db, obj_in=visa_type_in)
