"""Pydantic schemas for equipment maintenance records."""

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


class MaintenanceCreate(BaseModel):
    id: str | None = None
    equipment_name: NonBlank = Field(..., max_length=255)
    date_completed: DateStr
    performed_by: NonBlank = Field(..., max_length=100)
    maintenance_description: NonBlank
    checking_frequency: str | None = Field(None, max_length=100)
    notes: str | None = None


class MaintenanceUpdate(BaseModel):
    equipment_name: NonBlank | None = None
    date_completed: DateStr | None = None
    performed_by: NonBlank | None = None
    maintenance_description: NonBlank | None = None
    checking_frequency: str | None = Field(None, max_length=100)
    notes: str | None = None


class MaintenanceOut(RecordOut):
    equipment_name: str
    date_completed: str
    performed_by: str
    maintenance_description: str
    checking_frequency: str | None
    notes: str | None
