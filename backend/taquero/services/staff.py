"""Training records owned by a staff member.

Training changes travel to the same sheet as staff changes, form-encoded,
with the ``addTraining`` / ``updateTraining`` / ``deleteTraining`` actions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser
from taquero.middleware.exceptions import BusinessLogicError, ResourceNotFoundError
from taquero.models.record import RECORD_DELETED
from taquero.models.staff import StaffMember, TrainingRecord
from taquero.schemas.staff import TrainingCreate, TrainingOut, TrainingUpdate
from taquero.services.domains import STAFF
from taquero.services.records import utcnow
from taquero.services.sheets import SheetsClient, SyncResult
from taquero.utils.activity import log_activity
from taquero.utils.ids import generate_record_id


class TrainingService:
    def __init__(self, db: AsyncSession, user: StaffUser | None, sheets: SheetsClient):
        self.db = db
        self.user = user
        self.sheets = sheets

    async def _staff(self, staff_id: str) -> StaffMember:
        staff = await self.db.get(StaffMember, staff_id)
        if staff is None:
            raise ResourceNotFoundError("Staff member", staff_id)
        if staff.status == RECORD_DELETED:
            raise BusinessLogicError(
                f"Staff member {staff_id} has been deleted",
                error_code="RECORD_DELETED",
            )
        return staff

    def _training(self, staff: StaffMember, training_id: str) -> TrainingRecord:
        for record in staff.training_records:
            if record.id == training_id:
                return record
        raise ResourceNotFoundError("Training record", training_id)

    async def _sync(self, action: str, payload: dict) -> SyncResult:
        return await self.sheets.push_form(STAFF.sheet_domain, action, payload)

    async def _reorder(self, staff: StaffMember) -> None:
        # Newest first, as declared on the relationship
        await self.db.refresh(staff, attribute_names=["training_records"])

    async def add(self, staff_id: str, body: TrainingCreate) -> tuple[TrainingRecord, SyncResult]:
        staff = await self._staff(staff_id)
        record = TrainingRecord(
            id=body.id or generate_record_id("training"),
            staff_id=staff.id,
            created_by=self.user.name if self.user else "system",
            created_at=utcnow(),
            **body.model_dump(exclude={"id"}),
        )
        staff.training_records.append(record)
        await self.db.flush()

        sync = await self._sync("addTraining", TrainingOut.model_validate(record).model_dump())
        await log_activity(
            self.db, self.user,
            action="created",
            entity_type="staff_training",
            entity_id=record.id,
            summary=f"Training for {staff.name}: {record.training_type}",
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        await self._reorder(staff)
        return record, sync

    async def update(
        self, staff_id: str, training_id: str, body: TrainingUpdate
    ) -> tuple[TrainingRecord, SyncResult]:
        staff = await self._staff(staff_id)
        record = self._training(staff, training_id)

        updates = body.model_dump(exclude_unset=True)
        for key in ("training_type", "date"):
            if key in updates and updates[key] is None:
                raise BusinessLogicError(f"'{key}' cannot be cleared", error_code="FIELD_REQUIRED")
        for key, value in updates.items():
            setattr(record, key, value)
        record.updated_at = utcnow()
        await self.db.flush()

        sync = await self._sync("updateTraining", TrainingOut.model_validate(record).model_dump())
        await log_activity(
            self.db, self.user,
            action="updated",
            entity_type="staff_training",
            entity_id=record.id,
            summary=f"Updated training for {staff.name}: {record.training_type}",
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        await self._reorder(staff)
        return record, sync

    async def delete(self, staff_id: str, training_id: str) -> SyncResult:
        staff = await self._staff(staff_id)
        record = self._training(staff, training_id)
        staff.training_records.remove(record)
        await self.db.flush()

        sync = await self._sync("deleteTraining", {"id": training_id, "staff_id": staff_id})
        await log_activity(
            self.db, self.user,
            action="deleted",
            entity_type="staff_training",
            entity_id=training_id,
            summary=f"Deleted training for {staff.name}: {record.training_type}",
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        return sync
