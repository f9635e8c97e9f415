"""Proving methods: validate a cooking, cooling or reheating procedure.

A method is proven by three batches that each pass the rule for its
kind. A batch that fails is rejected outright; it never counts towards
the three. Each accepted batch is mirrored to the kind's sheet, with the
status reported as ``proven`` on the third.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser
from taquero.middleware.exceptions import BusinessLogicError, ResourceNotFoundError
from taquero.models.proving import METHOD_IN_PROGRESS, METHOD_PROVEN, ProvingBatch, ProvingMethod
from taquero.models.record import RECORD_ACTIVE, RECORD_DELETED
from taquero.schemas.common import RefreshResult
from taquero.schemas.proving import BatchInput, MethodCreate, MethodOut
from taquero.services.records import utcnow
from taquero.services.sheets import SheetsClient, SyncResult
from taquero.services.temperature import (
    COOKING_MIN_TEMP,
    REHEATING_MIN_TEMP,
    evaluate_cooling,
    is_cooking_safe,
    is_reheating_safe,
)
from taquero.utils.activity import log_activity
from taquero.utils.ids import generate_record_id

logger = logging.getLogger(__name__)

REQUIRED_BATCHES = 3
PROVING_KINDS = ("cooking", "cooling", "reheating")

_COOLING_READINGS = (
    "start_time",
    "start_temp",
    "second_time",
    "second_temp",
    "third_time",
    "third_temp",
)


def sheet_domain(kind: str) -> str:
    return f"proving_{kind}"


def method_out(method: ProvingMethod) -> MethodOut:
    out = MethodOut.model_validate(method)
    out.batches_remaining = max(REQUIRED_BATCHES - len(method.batches), 0)
    return out


def check_batch(kind: str, batch: BatchInput) -> None:
    """Raise BusinessLogicError unless the batch passes the rule for ``kind``."""
    if kind == "cooling":
        missing = [f for f in _COOLING_READINGS if getattr(batch, f) is None]
        if missing:
            raise BusinessLogicError(
                "A cooling batch needs all three timed readings",
                error_code="BATCH_INCOMPLETE",
                details={"missing": missing},
            )
        result = evaluate_cooling(
            batch.start_time,
            batch.second_time,
            batch.second_temp,
            batch.third_time,
            batch.third_temp,
            start_temp=batch.start_temp,
        )
        if not result.passed:
            raise BusinessLogicError(
                "Batch failed the cooling rule",
                error_code="BATCH_FAILED",
                details={"problems": result.problems},
            )
        return

    if batch.temperature is None:
        raise BusinessLogicError(
            "A batch needs a core temperature",
            error_code="BATCH_INCOMPLETE",
            details={"missing": ["temperature"]},
        )
    if kind == "reheating":
        safe, minimum = is_reheating_safe(batch.temperature), REHEATING_MIN_TEMP
    else:
        safe, minimum = is_cooking_safe(batch.temperature), COOKING_MIN_TEMP
    if not safe:
        raise BusinessLogicError(
            f"Batch failed: {batch.temperature}°C is below {minimum:g}°C",
            error_code="BATCH_FAILED",
            details={"temperature": batch.temperature, "minimum": minimum},
        )


def batch_payload(method: ProvingMethod, batch: ProvingBatch) -> dict:
    """One sheet row per batch, named the way each kind's sheet expects."""
    status = METHOD_PROVEN if batch.batch_number == REQUIRED_BATCHES else method.method_status
    row = {
        "method_id": method.id,
        "batch_number": batch.batch_number,
        "date": batch.date,
        "completed_by": batch.completed_by,
        "status": status,
        "created_by": method.created_by,
        "created_at": method.created_at,
    }
    if method.kind == "cooling":
        row.update(
            food_item=method.item_description,
            cooling_method=method.process_description,
            start_time=batch.start_time,
            start_temp=batch.start_temp,
            second_time_check=batch.second_time,
            second_temp_check=batch.second_temp,
            third_time_check=batch.third_time,
            third_temp_check=batch.third_temp,
        )
    else:
        row.update(
            item_description=method.item_description,
            temperature=batch.temperature,
            time_at_temp=batch.time_at_temp,
        )
        row[f"{method.kind}_method"] = method.process_description
    return row


class ProvingService:
    def __init__(self, db: AsyncSession, user: StaffUser | None, sheets: SheetsClient):
        self.db = db
        self.user = user
        self.sheets = sheets

    async def list(
        self,
        kind: str | None = None,
        method_status: str | None = None,
        include_deleted: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ProvingMethod], int]:
        query = select(ProvingMethod)
        count_query = select(func.count()).select_from(ProvingMethod)
        clauses = []
        if kind:
            clauses.append(ProvingMethod.kind == kind)
        if method_status:
            clauses.append(ProvingMethod.method_status == method_status)
        if not include_deleted:
            clauses.append(ProvingMethod.status != RECORD_DELETED)
        for clause in clauses:
            query = query.where(clause)
            count_query = count_query.where(clause)

        total = (await self.db.execute(count_query)).scalar() or 0
        query = query.order_by(ProvingMethod.created_at.desc(), ProvingMethod.id.desc())
        result = await self.db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all()), total

    async def get(self, method_id: str) -> ProvingMethod:
        method = await self.db.get(ProvingMethod, method_id)
        if method is None or method.status == RECORD_DELETED:
            raise ResourceNotFoundError("Proving method", method_id)
        return method

    async def create(self, body: MethodCreate) -> tuple[ProvingMethod, SyncResult]:
        # The first batch must pass before anything is stored
        check_batch(body.kind, body.first_batch)

        method_id = body.id or generate_record_id("method")
        if await self.db.get(ProvingMethod, method_id) is not None:
            raise BusinessLogicError(
                f"Proving method {method_id} already exists",
                error_code="DUPLICATE_RECORD",
            )
        method = ProvingMethod(
            id=method_id,
            kind=body.kind,
            item_description=body.item_description,
            process_description=body.process_description,
            method_status=METHOD_IN_PROGRESS,
            created_by=self.user.name if self.user else "system",
            created_at=utcnow(),
            status=RECORD_ACTIVE,
            batches=[],
        )
        self.db.add(method)
        await self.db.flush()

        await log_activity(
            self.db, self.user,
            action="created",
            entity_type=sheet_domain(method.kind),
            entity_id=method.id,
            summary=f"Started proving {method.kind} method: {method.item_description}",
        )
        sync = await self._add(method, body.first_batch)
        return method, sync

    async def add_batch(self, method_id: str, body: BatchInput) -> tuple[ProvingMethod, SyncResult]:
        method = await self.get(method_id)
        if method.method_status == METHOD_PROVEN:
            raise BusinessLogicError(
                "Method is already proven",
                error_code="METHOD_ALREADY_PROVEN",
            )
        check_batch(method.kind, body)
        sync = await self._add(method, body)
        return method, sync

    async def _add(self, method: ProvingMethod, body: BatchInput) -> SyncResult:
        batch = ProvingBatch(
            id=generate_record_id("batch"),
            method_id=method.id,
            batch_number=len(method.batches) + 1,
            created_at=utcnow(),
            **body.model_dump(),
        )
        method.batches.append(batch)
        if len(method.batches) >= REQUIRED_BATCHES:
            method.method_status = METHOD_PROVEN
            method.proven_at = utcnow()
        method.updated_at = utcnow()
        await self.db.flush()

        sync = await self.sheets.push(
            sheet_domain(method.kind), "addBatch", batch_payload(method, batch)
        )
        if sync.success:
            method.synced_at = utcnow()
            method.sync_error = None
        else:
            method.sync_error = sync.error

        await log_activity(
            self.db, self.user,
            action="batch_added",
            entity_type=sheet_domain(method.kind),
            entity_id=method.id,
            summary=(
                f"Batch {batch.batch_number}/{REQUIRED_BATCHES} for {method.item_description}"
                + (" (proven)" if method.method_status == METHOD_PROVEN else "")
            ),
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        return sync

    async def reset(self, method_id: str) -> ProvingMethod:
        """Clear every batch so the method can be proven again."""
        method = await self.get(method_id)
        method.batches.clear()
        method.method_status = METHOD_IN_PROGRESS
        method.proven_at = None
        method.updated_at = utcnow()
        await log_activity(
            self.db, self.user,
            action="reset",
            entity_type=sheet_domain(method.kind),
            entity_id=method.id,
            summary=f"Reset {method.kind} method: {method.item_description}",
        )
        await self.db.flush()
        return method

    async def delete(self, method_id: str) -> None:
        method = await self.get(method_id)
        if method.method_status != METHOD_IN_PROGRESS:
            raise BusinessLogicError(
                "Only methods still in progress can be deleted",
                error_code="METHOD_PROVEN",
            )
        await log_activity(
            self.db, self.user,
            action="deleted",
            entity_type=sheet_domain(method.kind),
            entity_id=method.id,
            summary=f"Deleted {method.kind} method: {method.item_description}",
        )
        await self.db.delete(method)
        await self.db.flush()

    async def refresh(self, kind: str) -> RefreshResult:
        """Pull a kind's sheet: methods are upserted by id and batches the
        local copy has not seen yet are appended."""
        fetched = await self.sheets.fetch(sheet_domain(kind))
        if not fetched.success:
            return RefreshResult(error=fetched.error)

        result = RefreshResult(fetched=len(fetched.rows))
        now = utcnow()
        for row in fetched.rows:
            method_id = row.get("id")
            item = row.get("item_description") or row.get("food_item")
            process = row.get("process_description") or row.get(f"{kind}_method")
            if not method_id or not item or not process:
                result.skipped += 1
                continue

            method = await self.db.get(ProvingMethod, str(method_id))
            if method is None:
                method = ProvingMethod(
                    id=str(method_id),
                    kind=kind,
                    item_description=item,
                    process_description=process,
                    method_status=METHOD_IN_PROGRESS,
                    created_by=row.get("created_by") or (self.user.name if self.user else "system"),
                    created_at=now,
                    status=RECORD_ACTIVE,
                    batches=[],
                )
                self.db.add(method)
                result.created += 1
            else:
                method.item_description = item
                method.process_description = process
                result.updated += 1

            known = {b.batch_number for b in method.batches}
            for raw in row.get("batches") or []:
                if not isinstance(raw, dict):
                    continue
                number = raw.get("batchNumber") or raw.get("batch_number")
                if not isinstance(number, int) or number in known or number > REQUIRED_BATCHES:
                    continue
                method.batches.append(ProvingBatch(
                    id=generate_record_id("batch"),
                    method_id=method.id,
                    batch_number=number,
                    date=str(raw.get("date") or "")[:10],
                    temperature=raw.get("temperature"),
                    time_at_temp=raw.get("timeAtTemp"),
                    start_time=raw.get("startTime"),
                    start_temp=raw.get("startTemp"),
                    second_time=raw.get("secondTimeCheck"),
                    second_temp=raw.get("secondTempCheck"),
                    third_time=raw.get("thirdTimeCheck"),
                    third_temp=raw.get("thirdTempCheck"),
                    completed_by=raw.get("completedBy") or "unknown",
                    created_at=now,
                ))
                known.add(number)

            if len(method.batches) >= REQUIRED_BATCHES and method.method_status != METHOD_PROVEN:
                method.method_status = METHOD_PROVEN
                method.proven_at = now
            method.synced_at = now
            method.sync_error = None

        await log_activity(
            self.db, self.user,
            action="refreshed",
            entity_type=sheet_domain(kind),
            summary=f"Pulled {result.fetched} {kind} methods",
        )
        await self.db.flush()
        return result
