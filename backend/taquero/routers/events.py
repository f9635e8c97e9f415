"""Caravan event router.

Endpoints:
    GET    /api/events/            List events (filter by status / year)
    GET    /api/events/upcoming    Events still ahead, soonest first
    + the standard record endpoints (create, update, delete, refresh)
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from taquero.models.event import CaravanEvent
from taquero.routers.records import build_record_router, get_record_service
from taquero.schemas.common import PaginatedResponse
from taquero.schemas.event import OPEN_EVENT_STATUSES, EventOut, EventStatus
from taquero.services.domains import EVENTS
from taquero.services.records import RecordService

router = APIRouter()


@router.get("/", response_model=PaginatedResponse[EventOut])
async def list_events(
    event_status: EventStatus | None = Query(None),
    year: int | None = Query(None),
    include_deleted: bool = False,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: RecordService = Depends(get_record_service),
):
    filters = []
    if event_status:
        filters.append(CaravanEvent.event_status == event_status)
    if year:
        filters.append(CaravanEvent.year == year)
    items, total = await service.list(
        EVENTS,
        limit=limit,
        offset=offset,
        include_deleted=include_deleted,
        filters=filters,
    )
    return PaginatedResponse(
        items=[EventOut.model_validate(e) for e in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/upcoming", response_model=list[EventOut])
async def upcoming_events(
    today: date | None = Query(None, description="Defaults to the server date"),
    service: RecordService = Depends(get_record_service),
):
    """Open events with at least one date on or after ``today``."""
    cutoff = (today or date.today()).isoformat()
    items, _ = await service.list(
        EVENTS,
        limit=1000,
        filters=[CaravanEvent.event_status.in_(OPEN_EVENT_STATUSES)],
    )
    upcoming = [e for e in items if e.dates and max(e.dates) >= cutoff]
    upcoming.sort(key=lambda e: (min(d for d in e.dates if d >= cutoff), e.name))
    return [EventOut.model_validate(e) for e in upcoming]


build_record_router(EVENTS, router, include_list=False)
