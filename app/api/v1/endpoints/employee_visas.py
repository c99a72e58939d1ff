from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.config import settings
from app.core.deps import get_current_active_user
from app.core.permissions import require_travel_manager
from app.db.database import get_db
from app.models.user import User

router = APIRouter()

def get_visa_or_404(db: Session, visa_id: str):
    visa = crud.employee_visa.get(db, id=visa_id)
    if not visa:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee visa not found"
        )
    return visa

@router.get("/", response_model=List[schemas.EmployeeVisa])
def get_employee_visas(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.employee_visa.get_multi_ordered(db)

@router.get("/expiring", response_model=List[schemas.EmployeeVisa])
def get_expiring_visas(
    days: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Valid visas expiring within the given number of days"""
    threshold = settings.EXPIRING_VISA_DAYS if days is None else days
    return crud.employee_visa.get_expiring(db, days=threshold)

@router.get("/expiring/{days}", response_model=List[schemas.EmployeeVisa])
def get_expiring_visas_within(
    days: int = Path(..., ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.employee_visa.get_expiring(db, days=days)

@router.get("/employee/{employee_id}", response_model=List[schemas.EmployeeVisa])
def get_visas_for_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return crud.employee_visa.get_by_employee(db, employee_id=employee_id)

@router.get("/{visa_id}", response_model=schemas.EmployeeVisa)
def get_employee_visa(
    visa_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    return get_visa_or_404(db, visa_id)

@router.post("/", response_model=schemas.EmployeeVisa, status_code=status.HTTP_201_CREATED)
def create_employee_visa(
    *,
    db: Session = Depends(get_db),
    visa_in: schemas.EmployeeVisaCreate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    """Issue a visa; the expiry date is derived from the visa type when omitted"""
    return crud.employee_visa.create_with_expiry(db, obj_in=visa_in)

@router.put("/{visa_id}", response_model=schemas.EmployeeVisa)
def update_employee_visa(
    *,
    db: Session = Depends(get_db),
    visa_id: str,
    visa_in: schemas.EmployeeVisaUpdate,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    visa = get_visa_or_404(db, visa_id)
    return crud.employee_visa.update_with_expiry(db, db_obj=visa, obj_in=visa_in)

@router.delete("/{visa_id}")
def delete_employee_visa(
    *,
    db: Session = Depends(get_db),
    visa_id: str,
    current_user: User = Depends(require_travel_manager)
) -> Any:
    get_visa_or_404(db, visa_id)
    crud.employee_visa.remove(db, id=visa_id)
    return {"message": "Employee visa deleted successfully"}
