"""Pydantic schemas for business-to-business sales (traceability)."""

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


class B2BSaleCreate(BaseModel):
    id: str | None = None
    business_name: NonBlank = Field(..., max_length=255)
    contact_details: str | None = None
    product_supplied: NonBlank = Field(..., max_length=255)
    quantity: float = Field(..., gt=0)
    unit: str = "kg"
    date_supplied: DateStr
    task_done_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None


class B2BSaleUpdate(BaseModel):
    business_name: NonBlank | None = None
    contact_details: str | None = None
    product_supplied: NonBlank | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = None
    date_supplied: DateStr | None = None
    task_done_by: NonBlank | None = None
    notes: str | None = None


class B2BSaleOut(RecordOut):
    business_name: str
    contact_details: str | None
    product_supplied: str
    quantity: float
    unit: str
    date_supplied: str
    task_done_by: str
    notes: str | None
