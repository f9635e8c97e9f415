"""Pydantic schemas for staff, their training records, and sickness records."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


# ── Staff ───────────────────────────────────────────────────

class StaffCreate(BaseModel):
    id: str | None = None
    name: NonBlank = Field(..., max_length=100)
    role: str | None = None
    start_date: DateStr | None = None
    notes: str | None = None


class StaffUpdate(BaseModel):
    name: NonBlank | None = None
    role: str | None = None
    start_date: DateStr | None = None
    notes: str | None = None


class TrainingCreate(BaseModel):
    id: str | None = None
    training_type: NonBlank = Field(..., max_length=255)
    date: DateStr
    trainer: str | None = None
    notes: str | None = None


class TrainingUpdate(BaseModel):
    training_type: NonBlank | None = None
    date: DateStr | None = None
    trainer: str | None = None
    notes: str | None = None


class TrainingOut(BaseModel):
    id: str
    staff_id: str
    training_type: str
    date: str
    trainer: str | None
    notes: str | None
    created_by: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class StaffOut(RecordOut):
    name: str
    role: str | None
    start_date: str | None
    notes: str | None
    training_records: list[TrainingOut] = []


# ── Sickness ────────────────────────────────────────────────

SicknessStatus = Literal["sick", "recovered"]


class SicknessCreate(BaseModel):
    id: str | None = None
    staff_name: NonBlank = Field(..., max_length=100)
    symptoms: NonBlank
    date_sick: DateStr
    date_returned: DateStr | None = None
    action_taken: str | None = None
    checked_by: NonBlank = Field(..., max_length=100)
    sickness_status: SicknessStatus = "sick"


class SicknessUpdate(BaseModel):
    staff_name: NonBlank | None = None
    symptoms: NonBlank | None = None
    date_sick: DateStr | None = None
    date_returned: DateStr | None = None
    action_taken: str | None = None
    checked_by: NonBlank | None = None
    sickness_status: SicknessStatus | None = None


class SicknessOut(RecordOut):
    staff_name: str
    symptoms: str
    date_sick: str
    date_returned: str | None
    action_taken: str | None
    checked_by: str
    sickness_status: str
