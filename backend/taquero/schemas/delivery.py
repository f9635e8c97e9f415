"""Pydantic schemas for goods-received (delivery) records."""

from pydantic import BaseModel, Field, model_validator

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank


class DeliveryCreate(BaseModel):
    id: str | None = None
    delivery_date: DateStr
    supplier_name: NonBlank = Field(..., max_length=255)
    supplier_contact: NonBlank = Field(..., max_length=255)
    batch_lot_id: str | None = None
    type_of_food: NonBlank = Field(..., max_length=255)
    quantity: float = Field(..., gt=0)
    unit: str = "kg"
    requires_temp_check: bool = False
    temperature: float | None = None
    task_done_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None

    @model_validator(mode="after")
    def _temperature_when_checked(self):
        if self.requires_temp_check and self.temperature is None:
            raise ValueError("temperature is required when requires_temp_check is set")
        if not self.requires_temp_check:
            self.temperature = None
        return self


class DeliveryUpdate(BaseModel):
    delivery_date: DateStr | None = None
    supplier_name: NonBlank | None = None
    supplier_contact: NonBlank | None = None
    batch_lot_id: str | None = None
    type_of_food: NonBlank | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = None
    requires_temp_check: bool | None = None
    temperature: float | None = None
    task_done_by: NonBlank | None = None
    notes: str | None = None


class DeliveryOut(RecordOut):
    delivery_date: str
    supplier_name: str
    supplier_contact: str | None
    batch_lot_id: str | None
    type_of_food: str
    quantity: float | None
    unit: str | None
    requires_temp_check: bool
    temperature: float | None
    temperature_warning: str | None
    task_done_by: str
    notes: str | None
