"""Pydantic schemas for proving (validating) cooking, cooling and reheating methods.

A method is proven once three consecutive batches pass the rule for its
kind. Batch fields are a superset: cooking and reheating batches use
``temperature`` / ``time_at_temp``; cooling batches use the three timed
readings.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import DateStr, NonBlank, TimeStr

MethodKind = Literal["cooking", "cooling", "reheating"]
MethodStatus = Literal["in-progress", "proven"]


class BatchInput(BaseModel):
    date: DateStr
    completed_by: NonBlank = Field(..., max_length=100)

    # cooking / reheating
    temperature: float | None = None
    time_at_temp: str | None = None

    # cooling
    start_time: TimeStr | None = None
    start_temp: float | None = None
    second_time: TimeStr | None = None
    second_temp: float | None = None
    third_time: TimeStr | None = None
    third_temp: float | None = None


class MethodCreate(BaseModel):
    id: str | None = None
    kind: MethodKind
    item_description: NonBlank = Field(..., max_length=255)
    process_description: NonBlank
    first_batch: BatchInput


class BatchOut(BaseModel):
    id: str
    method_id: str
    batch_number: int
    date: str
    temperature: float | None
    time_at_temp: str | None
    start_time: str | None
    start_temp: float | None
    second_time: str | None
    second_temp: float | None
    third_time: str | None
    third_temp: float | None
    completed_by: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MethodOut(RecordOut):
    kind: str
    item_description: str
    process_description: str
    method_status: str
    proven_at: datetime | None
    batches: list[BatchOut] = []
    batches_remaining: int = 0
