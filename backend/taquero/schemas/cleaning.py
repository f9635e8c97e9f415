"""Pydantic schemas for cleaning records."""

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


class CleaningCreate(BaseModel):
    id: str | None = None
    cleaning_task: NonBlank = Field(..., max_length=255)
    date_completed: DateStr
    cleaning_method: str | None = None
    completed_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None


class CleaningUpdate(BaseModel):
    cleaning_task: NonBlank | None = None
    date_completed: DateStr | None = None
    cleaning_method: str | None = None
    completed_by: NonBlank | None = None
    notes: str | None = None


class CleaningOut(RecordOut):
    cleaning_task: str
    date_completed: str
    cleaning_method: str | None
    completed_by: str
    notes: str | None
