"""ActivityLog: immutable audit trail of who changed which record.

Sync outcomes are recorded in ``details`` so a failed spreadsheet write
stays visible after the toast is gone.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    user_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # created | updated | deleted | purged | refreshed | reset |
    # batch_added | imported | uploaded
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # incidents | complaints | proving_cooking | finance | ...
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_id: Mapped[str | None] = mapped_column(String(64))

    summary: Mapped[str | None] = mapped_column(Text)
    details: Mapped[dict | None] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
