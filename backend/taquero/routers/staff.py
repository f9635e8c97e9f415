"""Staff and training router.

Endpoints:
    GET    /api/staff/                                  List staff (with training)
    POST   /api/staff/                                  Add staff member
    PATCH  /api/staff/{id}                              Update staff member
    DELETE /api/staff/{id}                              Remove staff member
    POST   /api/staff/{id}/training                     Add training record
    PATCH  /api/staff/{id}/training/{training_id}       Update training record
    DELETE /api/staff/{id}/training/{training_id}       Delete training record
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.routers.records import build_record_router, sync_status
from taquero.schemas.common import SyncedResponse, SyncStatus
from taquero.schemas.staff import TrainingCreate, TrainingOut, TrainingUpdate
from taquero.services.domains import STAFF
from taquero.services.sheets import SheetsClient, get_sheets_client
from taquero.services.staff import TrainingService

router = APIRouter()


async def get_training_service(
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
    sheets: SheetsClient = Depends(get_sheets_client),
) -> TrainingService:
    return TrainingService(db, user, sheets)


@router.post(
    "/{staff_id}/training",
    response_model=SyncedResponse[TrainingOut],
    status_code=201,
)
async def add_training(
    staff_id: str,
    body: TrainingCreate,
    service: TrainingService = Depends(get_training_service),
):
    record, sync = await service.add(staff_id, body)
    return SyncedResponse[TrainingOut](item=TrainingOut.model_validate(record), sync=sync_status(sync))


@router.patch("/{staff_id}/training/{training_id}", response_model=SyncedResponse[TrainingOut])
async def update_training(
    staff_id: str,
    training_id: str,
    body: TrainingUpdate,
    service: TrainingService = Depends(get_training_service),
):
    record, sync = await service.update(staff_id, training_id, body)
    return SyncedResponse[TrainingOut](item=TrainingOut.model_validate(record), sync=sync_status(sync))


@router.delete("/{staff_id}/training/{training_id}", response_model=SyncStatus)
async def delete_training(
    staff_id: str,
    training_id: str,
    service: TrainingService = Depends(get_training_service),
):
    return sync_status(await service.delete(staff_id, training_id))


build_record_router(STAFF, router)
