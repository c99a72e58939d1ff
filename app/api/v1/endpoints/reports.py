from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import schemas
from app.core.deps import get_current_active_user
from app.db.database import get_db
from app.models.user import User
from app.services.report_aggregator import report_aggregator

router = APIRouter()

@router.post("/employee", response_model=schemas.EmployeeReport)
def generate_employee_report(
    *,
    db: Session = Depends(get_db),
    report_in: schemas.EmployeeReportRequest,
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Flights, tickets, transfers and passport of one employee for a date window"""
    return report_aggregator.employee_report(
        db, report_in.employee_id, report_in.start_date, report_in.end_date
    )
