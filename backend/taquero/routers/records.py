"""CRUD router factory shared by every flat record type.

Endpoints (per record type, mounted at /api/<type>):
    GET    /                 List (newest first, deleted hidden)
    POST   /refresh          Pull the record's Google Sheet into the local store
    GET    /{id}             Get one record
    POST   /                 Create; response carries the sync outcome
    PATCH  /{id}             Partial update
    DELETE /{id}             Soft delete (?hard=true removes the row)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.schemas.common import PaginatedResponse, RefreshResult, SyncedResponse, SyncStatus
from taquero.services.records import RecordDomain, RecordService
from taquero.services.sheets import SheetsClient, SyncResult, get_sheets_client


async def get_record_service(
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
    sheets: SheetsClient = Depends(get_sheets_client),
) -> RecordService:
    return RecordService(db, user, sheets)


def sync_status(sync: SyncResult) -> SyncStatus:
    return SyncStatus(success=sync.success, error=sync.error)


def build_record_router(
    domain: RecordDomain,
    router: APIRouter | None = None,
    include_list: bool = True,
) -> APIRouter:
    """Attach the standard endpoints for ``domain`` to ``router``.

    Routers that need extra list filters or fixed paths (``/upcoming``)
    declare those first and pass ``include_list=False``.
    """
    router = router or APIRouter()
    Create = domain.create_schema
    Update = domain.update_schema
    Out = domain.out_schema

    if include_list:
        @router.get("/", response_model=PaginatedResponse[Out])
        async def list_records(
            include_deleted: bool = False,
            limit: int = Query(50, ge=1, le=500),
            offset: int = Query(0, ge=0),
            service: RecordService = Depends(get_record_service),
        ):
            items, total = await service.list(
                domain, limit=limit, offset=offset, include_deleted=include_deleted
            )
            return PaginatedResponse(
                items=[Out.model_validate(i) for i in items],
                total=total,
                limit=limit,
                offset=offset,
            )

    @router.post("/refresh", response_model=RefreshResult)
    async def refresh_records(service: RecordService = Depends(get_record_service)):
        """Upsert the sheet's rows by id; local-only rows are kept."""
        return await service.refresh(domain)

    @router.get("/{record_id}", response_model=Out)
    async def get_record(record_id: str, service: RecordService = Depends(get_record_service)):
        return Out.model_validate(await service.get(domain, record_id))

    @router.post("/", response_model=SyncedResponse[Out], status_code=201)
    async def create_record(body: Create, service: RecordService = Depends(get_record_service)):
        record, sync = await service.create(domain, body)
        return SyncedResponse[Out](item=Out.model_validate(record), sync=sync_status(sync))

    @router.patch("/{record_id}", response_model=SyncedResponse[Out])
    async def update_record(
        record_id: str,
        body: Update,
        service: RecordService = Depends(get_record_service),
    ):
        record, sync = await service.update(domain, record_id, body)
        return SyncedResponse[Out](item=Out.model_validate(record), sync=sync_status(sync))

    @router.delete("/{record_id}", response_model=SyncedResponse[Out])
    async def delete_record(
        record_id: str,
        hard: bool = False,
        service: RecordService = Depends(get_record_service),
    ):
        record, sync = await service.delete(domain, record_id, hard=hard)
        item = Out.model_validate(record) if record is not None else None
        return SyncedResponse[Out](item=item, sync=sync_status(sync))

    return router
