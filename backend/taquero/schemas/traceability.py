"""Pydantic schemas for traceability exercises.

Manufacturer details may be left out when the supplier made the product;
they are copied from the supplier on save.
"""

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


class TraceabilityCreate(BaseModel):
    id: str | None = None
    trace_date: DateStr
    product_type: NonBlank = Field(..., max_length=255)
    brand: NonBlank = Field(..., max_length=255)
    batch_lot_info: NonBlank = Field(..., max_length=255)
    supplier_name: NonBlank = Field(..., max_length=255)
    supplier_contact: NonBlank = Field(..., max_length=255)
    manufacturer_name: str | None = Field(None, max_length=255)
    manufacturer_contact: str | None = Field(None, max_length=255)
    date_received: DateStr | None = None
    performed_by: NonBlank = Field(..., max_length=100)
    other_info: str | None = None


class TraceabilityUpdate(BaseModel):
    trace_date: DateStr | None = None
    product_type: NonBlank | None = None
    brand: NonBlank | None = None
    batch_lot_info: NonBlank | None = None
    supplier_name: NonBlank | None = None
    supplier_contact: NonBlank | None = None
    manufacturer_name: str | None = Field(None, max_length=255)
    manufacturer_contact: str | None = Field(None, max_length=255)
    date_received: DateStr | None = None
    performed_by: NonBlank | None = None
    other_info: str | None = None


class TraceabilityOut(RecordOut):
    trace_date: str
    product_type: str
    brand: str
    batch_lot_info: str
    supplier_name: str
    supplier_contact: str
    manufacturer_name: str
    manufacturer_contact: str
    date_received: str | None
    performed_by: str
    other_info: str | None
