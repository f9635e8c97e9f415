"""Pydantic schemas for caravan events (festivals, markets, private bookings)."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank, OptionalEmail

EventType = Literal["festival", "recurrent", "private"]

EventStatus = Literal[
    "discovered",
    "interested",
    "applied",
    "accepted",
    "paid",
    "confirmed",
    "active",
    "completed",
    "denied",
    "cancelled_by_us",
    "cancelled_by_organizer",
    "postponed",
]

# Statuses that still end with the caravan turning up
OPEN_EVENT_STATUSES = (
    "discovered",
    "interested",
    "applied",
    "accepted",
    "paid",
    "confirmed",
    "active",
    "postponed",
)


class EventCreate(BaseModel):
    id: str | None = None
    name: NonBlank = Field(..., max_length=255)
    event_type: EventType = "festival"
    event_status: EventStatus = "discovered"
    dates: list[DateStr] = Field(..., min_length=1)
    year: int | None = None
    location: str | None = None
    organizer_name: str | None = None
    organizer_email: OptionalEmail = None
    organizer_phone: str | None = None
    website_url: str | None = None
    fee_amount: float | None = Field(None, ge=0)
    fee_paid: bool = False
    power_available: bool = False
    generator_needed: bool = False
    expected_revenue: float | None = Field(None, ge=0)
    actual_revenue: float | None = Field(None, ge=0)
    notes: str | None = None

    @field_validator("dates")
    @classmethod
    def _sorted_dates(cls, v: list[str]) -> list[str]:
        return sorted(set(v))


class EventUpdate(BaseModel):
    name: NonBlank | None = None
    event_type: EventType | None = None
    event_status: EventStatus | None = None
    dates: list[DateStr] | None = None
    year: int | None = None
    location: str | None = None
    organizer_name: str | None = None
    organizer_email: OptionalEmail = None
    organizer_phone: str | None = None
    website_url: str | None = None
    fee_amount: float | None = Field(None, ge=0)
    fee_paid: bool | None = None
    power_available: bool | None = None
    generator_needed: bool | None = None
    expected_revenue: float | None = Field(None, ge=0)
    actual_revenue: float | None = Field(None, ge=0)
    notes: str | None = None

    @field_validator("dates")
    @classmethod
    def _sorted_dates(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        if not v:
            raise ValueError("An event needs at least one date")
        return sorted(set(v))


class EventOut(RecordOut):
    name: str
    event_type: str
    event_status: str
    dates: list[str]
    year: int | None
    location: str | None
    organizer_name: str | None
    organizer_email: str | None
    organizer_phone: str | None
    website_url: str | None
    fee_amount: float | None
    fee_paid: bool
    power_available: bool
    generator_needed: bool
    expected_revenue: float | None
    actual_revenue: float | None
    notes: str | None
