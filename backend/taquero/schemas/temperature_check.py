"""Pydantic schemas for temperature checks.

Derived verdicts (``temperature_level``, ``is_safe``, ``passed``,
``out_of_range``) are output-only; they are recomputed from the readings
on every save.
"""

from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank, TimeStr

BatchCheckType = Literal["cooking", "hot-holding", "reheating"]

MAX_CHILLERS = 6


# ── Transport ───────────────────────────────────────────────

class TransportCheckCreate(BaseModel):
    id: str | None = None
    check_date: DateStr
    type_of_food: NonBlank = Field(..., max_length=255)
    temperature: float
    task_done_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None


class TransportCheckUpdate(BaseModel):
    check_date: DateStr | None = None
    type_of_food: NonBlank | None = None
    temperature: float | None = None
    task_done_by: NonBlank | None = None
    notes: str | None = None


class TransportCheckOut(RecordOut):
    check_date: str
    type_of_food: str
    temperature: float
    temperature_level: str
    task_done_by: str
    notes: str | None


# ── Cooking / reheating batch checks ────────────────────────

class BatchCheckCreate(BaseModel):
    id: str | None = None
    check_date: DateStr
    check_time: TimeStr | None = None
    food_type: NonBlank = Field(..., max_length=100)
    check_type: BatchCheckType = "cooking"
    temperature: float
    time_at_temp: str | None = None
    completed_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None


class BatchCheckUpdate(BaseModel):
    check_date: DateStr | None = None
    check_time: TimeStr | None = None
    food_type: NonBlank | None = None
    check_type: BatchCheckType | None = None
    temperature: float | None = None
    time_at_temp: str | None = None
    completed_by: NonBlank | None = None
    notes: str | None = None


class BatchCheckOut(RecordOut):
    check_date: str
    check_time: str | None
    food_type: str
    check_type: str
    temperature: float
    time_at_temp: str | None
    is_safe: bool
    completed_by: str
    notes: str | None


# ── Cooling ─────────────────────────────────────────────────

class CoolingCheckCreate(BaseModel):
    """Second and third readings may be filled in later with an update."""
    id: str | None = None
    food_type: NonBlank = Field(..., max_length=100)
    date_cooked: DateStr
    start_time: TimeStr
    start_temp: float = 60.0
    second_time_check: TimeStr | None = None
    second_temp_check: float | None = None
    third_time_check: TimeStr | None = None
    third_temp_check: float | None = None
    cooling_method: str | None = None
    completed_by: NonBlank = Field(..., max_length=100)


class CoolingCheckUpdate(BaseModel):
    food_type: NonBlank | None = None
    date_cooked: DateStr | None = None
    start_time: TimeStr | None = None
    start_temp: float | None = None
    second_time_check: TimeStr | None = None
    second_temp_check: float | None = None
    third_time_check: TimeStr | None = None
    third_temp_check: float | None = None
    cooling_method: str | None = None
    completed_by: NonBlank | None = None


class CoolingCheckOut(RecordOut):
    food_type: str
    date_cooked: str
    start_time: str
    start_temp: float
    second_time_check: str | None
    second_temp_check: float | None
    third_time_check: str | None
    third_temp_check: float | None
    cooling_method: str | None
    passed: bool | None
    completed_by: str


# ── Fridge / freezer ────────────────────────────────────────

class FridgeCheckCreate(BaseModel):
    """``chillers`` lists the readings in unit order (Chiller #1 first)."""
    id: str | None = None
    check_date: DateStr
    chillers: list[float] = Field(..., min_length=1, max_length=MAX_CHILLERS)
    freezer: float
    checked_by: NonBlank = Field(..., max_length=100)
    notes: str | None = None


class FridgeCheckUpdate(BaseModel):
    check_date: DateStr | None = None
    chillers: list[float] | None = Field(None, min_length=1, max_length=MAX_CHILLERS)
    freezer: float | None = None
    checked_by: NonBlank | None = None
    notes: str | None = None


class FridgeCheckOut(RecordOut):
    check_date: str
    chillers: list[float]
    freezer: float
    out_of_range: list[str]
    all_in_range: bool
    checked_by: str
    notes: str | None
