"""Pydantic schemas for customer complaints."""

from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank, TimeStr

ComplaintType = Literal[
    "Illness/Sickness",
    "Foreign Object",
    "Quality Issue",
    "Temperature Issue",
    "Allergen Issue",
    "Other",
]
ComplaintStatus = Literal["open", "investigating", "resolved"]


class ComplaintCreate(BaseModel):
    id: str | None = None
    customer_name: NonBlank = Field(..., max_length=255)
    customer_contact: NonBlank = Field(..., max_length=255)
    purchase_date: DateStr
    purchase_time: TimeStr
    food_item: NonBlank = Field(..., max_length=255)
    batch_lot_number: str | None = None
    complaint_description: NonBlank
    complaint_type: ComplaintType
    cause_investigation: str | None = None
    action_taken_immediate: str | None = None
    action_taken_preventive: str | None = None
    resolved_by: str | None = None
    resolution_date: DateStr | None = None
    complaint_status: ComplaintStatus = "open"
    linked_incident_id: str | None = None
    notes: str | None = None


class ComplaintUpdate(BaseModel):
    customer_name: NonBlank | None = None
    customer_contact: NonBlank | None = None
    purchase_date: DateStr | None = None
    purchase_time: TimeStr | None = None
    food_item: NonBlank | None = None
    batch_lot_number: str | None = None
    complaint_description: NonBlank | None = None
    complaint_type: ComplaintType | None = None
    cause_investigation: str | None = None
    action_taken_immediate: str | None = None
    action_taken_preventive: str | None = None
    resolved_by: str | None = None
    resolution_date: DateStr | None = None
    complaint_status: ComplaintStatus | None = None
    linked_incident_id: str | None = None
    notes: str | None = None


class ComplaintOut(RecordOut):
    customer_name: str
    customer_contact: str | None
    purchase_date: str
    purchase_time: str | None
    food_item: str
    batch_lot_number: str | None
    complaint_description: str
    complaint_type: str
    cause_investigation: str | None
    action_taken_immediate: str | None
    action_taken_preventive: str | None
    resolved_by: str | None
    resolution_date: str | None
    complaint_status: str
    linked_incident_id: str | None
    notes: str | None
