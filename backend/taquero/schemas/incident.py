"""Pydantic schemas for "something went wrong" incident records."""

from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank

IncidentCategory = Literal[
    "equipment-failure",
    "temperature-issue",
    "contamination",
    "supplier-problem",
    "staff-error",
    "facility-issue",
    "other",
]
IncidentSeverity = Literal["minor", "moderate", "major"]
IncidentStatus = Literal["open", "resolved"]


class IncidentCreate(BaseModel):
    id: str | None = None
    incident_date: DateStr
    person_responsible: NonBlank = Field(..., max_length=100)
    staff_involved: str | None = None
    category: IncidentCategory = "equipment-failure"
    what_went_wrong: NonBlank = Field(..., min_length=10)
    what_did_to_fix: NonBlank = Field(..., min_length=10)
    preventive_action: str | None = Field(None, min_length=10)
    severity: IncidentSeverity = "minor"
    incident_status: IncidentStatus = "open"
    follow_up_date: DateStr | None = None
    notes: str | None = None


class IncidentUpdate(BaseModel):
    incident_date: DateStr | None = None
    person_responsible: NonBlank | None = None
    staff_involved: str | None = None
    category: IncidentCategory | None = None
    what_went_wrong: NonBlank | None = Field(None, min_length=10)
    what_did_to_fix: NonBlank | None = Field(None, min_length=10)
    preventive_action: str | None = Field(None, min_length=10)
    severity: IncidentSeverity | None = None
    incident_status: IncidentStatus | None = None
    follow_up_date: DateStr | None = None
    notes: str | None = None


class IncidentOut(RecordOut):
    incident_date: str
    person_responsible: str
    staff_involved: str | None
    category: str
    what_went_wrong: str
    what_did_to_fix: str
    preventive_action: str | None
    severity: str
    incident_status: str
    follow_up_date: str | None
    notes: str | None
