"""Proving method router (cooking, cooling and reheating validation).

Endpoints:
    GET    /api/proving/                   List methods (?kind=&method_status=)
    POST   /api/proving/refresh/{kind}     Pull a kind's sheet
    POST   /api/proving/                   Start a method with its first batch
    GET    /api/proving/{id}               Method with batches
    POST   /api/proving/{id}/batches       Record the next batch
    POST   /api/proving/{id}/reset         Clear batches, back to in-progress
    DELETE /api/proving/{id}               Delete (in-progress methods only)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.routers.records import sync_status
from taquero.schemas.common import PaginatedResponse, RefreshResult, SyncedResponse
from taquero.schemas.proving import BatchInput, MethodCreate, MethodKind, MethodOut, MethodStatus
from taquero.services.proving import ProvingService, method_out
from taquero.services.sheets import SheetsClient, get_sheets_client

router = APIRouter()


async def get_proving_service(
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
    sheets: SheetsClient = Depends(get_sheets_client),
) -> ProvingService:
    return ProvingService(db, user, sheets)


@router.get("/", response_model=PaginatedResponse[MethodOut])
async def list_methods(
    kind: MethodKind | None = Query(None),
    method_status: MethodStatus | None = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: ProvingService = Depends(get_proving_service),
):
    items, total = await service.list(
        kind=kind, method_status=method_status, limit=limit, offset=offset
    )
    return PaginatedResponse(
        items=[method_out(m) for m in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("/refresh/{kind}", response_model=RefreshResult)
async def refresh_methods(
    kind: MethodKind,
    service: ProvingService = Depends(get_proving_service),
):
    return await service.refresh(kind)


@router.post("/", response_model=SyncedResponse[MethodOut], status_code=201)
async def create_method(
    body: MethodCreate,
    service: ProvingService = Depends(get_proving_service),
):
    method, sync = await service.create(body)
    return SyncedResponse[MethodOut](item=method_out(method), sync=sync_status(sync))


@router.get("/{method_id}", response_model=MethodOut)
async def get_method(
    method_id: str,
    service: ProvingService = Depends(get_proving_service),
):
    return method_out(await service.get(method_id))


@router.post("/{method_id}/batches", response_model=SyncedResponse[MethodOut], status_code=201)
async def add_batch(
    method_id: str,
    body: BatchInput,
    service: ProvingService = Depends(get_proving_service),
):
    method, sync = await service.add_batch(method_id, body)
    return SyncedResponse[MethodOut](item=method_out(method), sync=sync_status(sync))


@router.post("/{method_id}/reset", response_model=MethodOut)
async def reset_method(
    method_id: str,
    service: ProvingService = Depends(get_proving_service),
):
    return method_out(await service.reset(method_id))


@router.delete("/{method_id}", status_code=204)
async def delete_method(
    method_id: str,
    service: ProvingService = Depends(get_proving_service),
):
    await service.delete(method_id)
