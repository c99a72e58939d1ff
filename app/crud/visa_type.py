from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.visa_type import VisaType
from app.schemas.visa_type import VisaTypeCreate, VisaTypeUpdate

class CRUDVisaType(CRUDBase[VisaType, VisaTypeCreate, VisaTypeUpdate]):
    def get_multi_ordered(self, db: Session) -> List[VisaType]:
        return db.query(VisaType).order_by(VisaType.country_name, VisaType.type).all()

visa_type = CRUDVisaType(VisaType)
