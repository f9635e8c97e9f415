"""Activity log: who changed which record, and whether the sheet accepted it.

Endpoints:
    GET /api/activity    List entries, newest first (filters: entity_type,
                         entity_id, action, user_name)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.models.activity_log import ActivityLog
from taquero.schemas.activity import ActivityOut
from taquero.schemas.common import PaginatedResponse

router = APIRouter()


@router.get("/", response_model=PaginatedResponse[ActivityOut])
async def list_activity(
    entity_type: str | None = Query(None),
    entity_id: str | None = Query(None),
    action: str | None = Query(None),
    user_name: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    """List activity log entries with optional filters."""
    query = select(ActivityLog)
    count_query = select(func.count()).select_from(ActivityLog)

    filters = {
        ActivityLog.entity_type: entity_type,
        ActivityLog.entity_id: entity_id,
        ActivityLog.action: action,
        ActivityLog.user_name: user_name,
    }
    for column, value in filters.items():
        if value:
            query = query.where(column == value)
            count_query = count_query.where(column == value)

    total_r = await db.execute(count_query)
    total = total_r.scalar() or 0

    result = await db.execute(
        query.order_by(ActivityLog.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    items = [ActivityOut.model_validate(a) for a in result.scalars().all()]

    return PaginatedResponse(items=items, total=total, limit=limit, offset=offset)
