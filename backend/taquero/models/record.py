"""Columns shared by every synced record type.

- audit trail: who created it, when, and when it last changed
- ``status``: "active" | "deleted" (soft delete)
- sync bookkeeping: when the sheet last accepted it, and the last
  rejection message if it did not
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

RECORD_ACTIVE = "active"
RECORD_DELETED = "deleted"


class RecordMixin:
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime)
    status: Mapped[str] = mapped_column(
        String(20), default=RECORD_ACTIVE, nullable=False, index=True
    )

    synced_at: Mapped[datetime | None] = mapped_column(DateTime)
    sync_error: Mapped[str | None] = mapped_column(Text)
