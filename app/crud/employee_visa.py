import logging
from datetime import date, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound
from app.crud.base import CRUDBase
from app.models.employee import Employee
from app.models.employee_visa import EmployeeVisa, VisaStatus
from app.models.visa_type import VisaType
from app.schemas.employee_visa import EmployeeVisaCreate, EmployeeVisaUpdate
from app.services.expiry_calculator import compute_expiry

logger = logging.getLogger(__name__)

class CRUDEmployeeVisa(CRUDBase[EmployeeVisa, EmployeeVisaCreate, EmployeeVisaUpdate]):
    def get_multi_ordered(self, db: Session) -> List[EmployeeVisa]:
        return db.query(EmployeeVisa).order_by(EmployeeVisa.expiry_date.asc()).all()

    def get_by_employee(self, db: Session, *, employee_id: str) -> List[EmployeeVisa]:
        return db.query(EmployeeVisa).filter(
            EmployeeVisa.employee_id == employee_id
        ).order_by(EmployeeVisa.expiry_date.asc()).all()

    def get_expiring(self, db: Session, *, days: int, today: Optional[date] = None) -> List[EmployeeVisa]:
        """Valid visas expiring between today and today + days, both inclusive."""
        today = today or date.today()
        threshold = today + timedelta(days=days)
        return db.query(EmployeeVisa).filter(
            EmployeeVisa.status == VisaStatus.VALID,
            EmployeeVisa.expiry_date >= today,
            EmployeeVisa.expiry_date <= threshold,
        ).order_by(EmployeeVisa.expiry_date.asc()).all()

    def _get_employee(self, db: Session, employee_id: str) -> Employee:
        employee = db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFound("Employee", employee_id)
        return employee

    def _get_visa_type(self, db: Session, visa_type_id: str) -> VisaType:
        visa_type = db.query(VisaType).filter(VisaType.id == visa_type_id).first()
        if not visa_type:
            raise NotFound("Visa type", visa_type_id)
        return visa_type

    def create_with_expiry(self, db: Session, *, obj_in: EmployeeVisaCreate) -> EmployeeVisa:
        """Issue a visa, deriving the expiry date from the visa type when none is given."""
        self._get_employee(db, obj_in.employee_id)
        visa_type = self._get_visa_type(db, obj_in.visa_type_id)

        obj_in_data = obj_in.dict()
        if not obj_in_data.get("expiry_date"):
            # Raises before anything is written
            obj_in_data["expiry_date"] = compute_expiry(obj_in.issue_date, visa_type)

        db_obj = self.save(db, EmployeeVisa(**obj_in_data))
        logger.info(
            f"Issued {visa_type.type} visa {db_obj.id} to employee {db_obj.employee_id}, "
            f"expires {db_obj.expiry_date.isoformat()}"
        )
        return db_obj

    def update_with_expiry(
        self, db: Session, *, db_obj: EmployeeVisa, obj_in: EmployeeVisaUpdate
    ) -> EmployeeVisa:
        """Update a visa, recomputing the expiry when its visa type or issue date changes."""
        update_data = obj_in.dict(exclude_unset=True)

        if update_data.get("employee_id"):
            self._get_employee(db, update_data["employee_id"])
        else:
            update_data.pop("employee_id", None)

        visa_type = db_obj.visa_type
        if update_data.get("visa_type_id"):
            visa_type = self._get_visa_type(db, update_data["visa_type_id"])
        else:
            update_data.pop("visa_type_id", None)

        if update_data.get("expiry_date") is None:
            update_data.pop("expiry_date", None)
            if "visa_type_id" in update_data or "issue_date" in update_data:
                issue_date = update_data.get("issue_date", db_obj.issue_date)
                update_data["expiry_date"] = compute_expiry(issue_date, visa_type)

        if update_data.get("status") is None:
            update_data.pop("status", None)

        return self.update(db, db_obj=db_obj, obj_in=update_data)

employee_visa = CRUDEmployeeVisa(EmployeeVisa)
