from typing import NamedTuple, Optional
from sqlalchemy import Column, String, Integer, Enum, Text
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum

class DurationUnit(enum.Enum):
    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"

# Fixed approximations: not calendar accurate, not leap aware
DAYS_PER_UNIT = {
    DurationUnit.DAYS: 1,
    DurationUnit.MONTHS: 30,
    DurationUnit.YEARS: 365,
}

class VisaDuration(NamedTuple):
    magnitude: int
    unit: DurationUnit

    @property
    def days(self) -> int:
        return self.magnitude * DAYS_PER_UNIT[self.unit]

    @property
    def label(self) -> str:
        unit = self.unit.value
        if self.magnitude == 1:
            unit = unit[:-1]
        return f"{self.magnitude} {unit}"


class VisaType(BaseModel):
    __tablename__ = "visa_types"

    type = Column(String(100), nullable=False)
    country_code = Column(String(3), nullable=True)
    country_name = Column(String(100), nullable=False)
    requirements = Column(Text, nullable=True)

    # Unknown durations are allowed; issuing from them needs an explicit expiry
    duration_value = Column(Integer, nullable=True)
    duration_unit = Column(Enum(DurationUnit), nullable=True)

    # Relationships
    visas = relationship("EmployeeVisa", back_populates="visa_type")

    @property
    def duration(self) -> Optional[VisaDuration]:
        if self.duration_value is None or self.duration_unit is None:
            return None
        return VisaDuration(self.duration_value, self.duration_unit)

    @property
    def duration_days(self) -> int:
        duration = self.duration
        return duration.days if duration else 0

    @property
    def duration_label(self) -> Optional[str]:
        duration = self.duration
        return duration.label if duration else None
