"""Lightweight helper for recording activity log entries.

Usage:
    await log_activity(
        db, user, action="created", entity_type="incidents",
        entity_id=record.id, summary="Logged incident: fridge door seal",
    )

The row is added to the current session and committed with the
enclosing transaction; no extra flush is performed.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser
from taquero.models.activity_log import ActivityLog


async def log_activity(
    db: AsyncSession,
    user: StaffUser | None,
    *,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    summary: str | None = None,
    details: dict | None = None,
) -> None:
    entry = ActivityLog(
        user_name=user.name if user else "system",
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        summary=summary,
        details=details,
    )
    db.add(entry)
