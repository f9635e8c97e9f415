"""Common schemas used across the application."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper.

    Returns:
        {
            "items": [...],
            "total": 150,
            "limit": 50,
            "offset": 0
        }
    """
    items: list[T]
    total: int
    limit: int
    offset: int


class SyncStatus(BaseModel):
    """Outcome of mirroring a change to the record's Google Sheet."""
    success: bool
    error: str | None = None


class SyncedResponse(BaseModel, Generic[T]):
    """A saved record plus what the spreadsheet said about it.

    ``sync.success`` false means the change is stored locally only.
    """
    item: T | None = None
    sync: SyncStatus


class RecordOut(BaseModel):
    """Audit and sync columns every synced record carries."""
    id: str
    created_by: str
    created_at: datetime
    updated_at: datetime | None = None
    status: str
    synced_at: datetime | None = None
    sync_error: str | None = None

    model_config = {"from_attributes": True}


class RefreshResult(BaseModel):
    fetched: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    error: str | None = None
