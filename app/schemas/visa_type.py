from typing import Optional
from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from app.models.visa_type import DurationUnit
from app.services.duration_parser import parse_duration

# Largest magnitude accepted on input, in any unit
MAX_DURATION_VALUE = 36500

class VisaTypeBase(BaseModel):
    type: str = Field(..., min_length=1, max_length=100)
    country_name: str = Field(..., min_length=1, max_length=100)
    country_code: Optional[str] = Field(None, max_length=3)
    requirements: Optional[str] = None
    duration_value: Optional[int] = Field(None, gt=0)
    duration_unit: Optional[DurationUnit] = None

class VisaTypeCreate(VisaTypeBase):
    # Legacy free-text duration ("90 days"), converted once on the way in
    duration_value: Optional[int] = Field(None, gt=0, le=MAX_DURATION_VALUE)
    duration: Optional[str] = Field(None, exclude=True)

    @model_validator(mode="after")
    def resolve_duration(self):
        if self.duration_value is not None or self.duration_unit is not None:
            if self.duration_value is None:
                raise ValueError("duration_value is required when duration_unit is given")
            if self.duration_unit is None:
                self.duration_unit = DurationUnit.DAYS
            return self

        parsed = parse_duration(self.duration)
        if parsed:
            if parsed.magnitude > MAX_DURATION_VALUE:
                raise ValueError(f"duration cannot exceed {MAX_DURATION_VALUE} {parsed.unit.value}")
            self.duration_value = parsed.magnitude
            self.duration_unit = parsed.unit
        return self

class VisaTypeUpdate(BaseModel):
    type: Optional[str] = None
    country_name: Optional[str] = None
    country_code: Optional[str] = None
    requirements: Optional[str] = None
    duration_value: Optional[int] = Field(None, gt=0, le=MAX_DURATION_VALUE)
    duration_unit: Optional[DurationUnit] = None

class VisaType(VisaTypeBase):
    id: str
    duration_label: Optional[str] = None
    duration_days: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
