"""Pydantic schemas for the approved supplier list."""

from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import NonBlank, OptionalEmail

Weekday = Literal[
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


class SupplierCreate(BaseModel):
    id: str | None = None
    business_name: NonBlank = Field(..., max_length=255)
    site_registration_number: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: OptionalEmail = None
    address: str | None = None
    order_days: list[Weekday] = []
    delivery_days: list[Weekday] = []
    custom_arrangement: str | None = None
    goods_supplied: str | None = None
    comments: str | None = None


class SupplierUpdate(BaseModel):
    business_name: NonBlank | None = None
    site_registration_number: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: OptionalEmail = None
    address: str | None = None
    order_days: list[Weekday] | None = None
    delivery_days: list[Weekday] | None = None
    custom_arrangement: str | None = None
    goods_supplied: str | None = None
    comments: str | None = None


class SupplierOut(RecordOut):
    business_name: str
    site_registration_number: str | None
    contact_person: str | None
    phone: str | None
    email: str | None
    address: str | None
    order_days: list[str]
    delivery_days: list[str]
    custom_arrangement: str | None
    goods_supplied: str | None
    comments: str | None
