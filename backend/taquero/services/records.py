"""Local-first CRUD for every synced record type.

Each mutation is written to the database first and then mirrored to the
domain's Google Sheet. A failed mirror never undoes the local change: the
error is stored on the record (``sync_error``) and returned to the caller.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser
from taquero.middleware.exceptions import BusinessLogicError, ResourceNotFoundError
from taquero.models.record import RECORD_ACTIVE, RECORD_DELETED
from taquero.schemas.common import RefreshResult
from taquero.services.sheets import SheetsClient, SyncResult
from taquero.utils.activity import log_activity
from taquero.utils.ids import generate_record_id

logger = logging.getLogger(__name__)

DEFAULT_ACTIONS = {"create": "create", "update": "update", "delete": "delete"}


@dataclass
class RecordDomain:
    """Everything the generic service needs to know about one record type."""

    name: str
    model: type
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    out_schema: type[BaseModel]
    id_prefix: str
    label: str
    title_field: str
    # Sheet web app to mirror into; defaults to ``name``
    sheet: str | None = None
    # Remote action names (staff uses addStaff / updateStaff / deleteStaff)
    actions: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ACTIONS))
    form_encoded: bool = False
    # Recompute output-only fields after every write
    derive: Callable[[Any], None] | None = None

    @property
    def sheet_domain(self) -> str:
        return self.sheet or self.name


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _title(domain: RecordDomain, record) -> str:
    title = str(getattr(record, domain.title_field, None) or record.id)
    return title if len(title) <= 80 else title[:77] + "..."


def _parse_timestamp(value) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class RecordService:
    def __init__(self, db: AsyncSession, user: StaffUser | None, sheets: SheetsClient):
        self.db = db
        self.user = user
        self.sheets = sheets

    @property
    def _user_name(self) -> str:
        return self.user.name if self.user else "system"

    # ── Reads ───────────────────────────────────────────────

    async def list(
        self,
        domain: RecordDomain,
        *,
        limit: int = 50,
        offset: int = 0,
        include_deleted: bool = False,
        filters: list | None = None,
        order_by=None,
    ) -> tuple[list, int]:
        """Newest first; soft-deleted rows are hidden unless asked for."""
        model = domain.model
        query = select(model)
        count_query = select(func.count()).select_from(model)

        clauses = list(filters or [])
        if not include_deleted:
            clauses.append(model.status != RECORD_DELETED)
        for clause in clauses:
            query = query.where(clause)
            count_query = count_query.where(clause)

        total = (await self.db.execute(count_query)).scalar() or 0
        query = query.order_by(
            *(order_by if order_by is not None else [model.created_at.desc(), model.id.desc()])
        )
        result = await self.db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all()), total

    async def get(self, domain: RecordDomain, record_id: str):
        record = await self.db.get(domain.model, record_id)
        if record is None:
            raise ResourceNotFoundError(domain.label, record_id)
        return record

    # ── Writes ──────────────────────────────────────────────

    async def create(self, domain: RecordDomain, body: BaseModel) -> tuple[Any, SyncResult]:
        data = body.model_dump(exclude={"id"})
        record_id = getattr(body, "id", None) or generate_record_id(domain.id_prefix)
        if await self.db.get(domain.model, record_id) is not None:
            raise BusinessLogicError(
                f"{domain.label} {record_id} already exists",
                error_code="DUPLICATE_RECORD",
            )

        record = domain.model(
            id=record_id,
            created_by=self._user_name,
            created_at=utcnow(),
            status=RECORD_ACTIVE,
            **data,
        )
        if domain.derive:
            domain.derive(record)
        self.db.add(record)
        await self.db.flush()

        sync = await self._push(domain, "create", self.payload(domain, record))
        self._mark_synced(record, sync)
        await log_activity(
            self.db, self.user,
            action="created",
            entity_type=domain.name,
            entity_id=record.id,
            summary=f"Created {domain.label}: {_title(domain, record)}",
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        return record, sync

    async def update(
        self, domain: RecordDomain, record_id: str, body: BaseModel
    ) -> tuple[Any, SyncResult]:
        record = await self.get(domain, record_id)
        if record.status == RECORD_DELETED:
            raise BusinessLogicError(
                f"{domain.label} {record_id} has been deleted",
                error_code="RECORD_DELETED",
            )

        updates = body.model_dump(exclude_unset=True)
        required = {
            name for name, info in domain.create_schema.model_fields.items() if info.is_required()
        }
        cleared = sorted(k for k, v in updates.items() if v is None and k in required)
        if cleared:
            raise BusinessLogicError(
                f"Required field(s) cannot be cleared: {', '.join(cleared)}",
                error_code="FIELD_REQUIRED",
                details={"fields": cleared},
            )
        for key, value in updates.items():
            setattr(record, key, value)
        record.updated_at = utcnow()
        if domain.derive:
            domain.derive(record)
        await self.db.flush()

        sync = await self._push(domain, "update", self.payload(domain, record))
        self._mark_synced(record, sync)
        await log_activity(
            self.db, self.user,
            action="updated",
            entity_type=domain.name,
            entity_id=record.id,
            summary=f"Updated {domain.label}: {_title(domain, record)}",
            details={"fields": sorted(updates), "synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        return record, sync

    async def delete(
        self, domain: RecordDomain, record_id: str, hard: bool = False
    ) -> tuple[Any | None, SyncResult]:
        """Soft delete keeps the row as ``deleted``; hard delete removes it.

        Either way the record is gone from the default list from now on.
        """
        record = await self.get(domain, record_id)
        title = _title(domain, record)

        if hard:
            await self.db.delete(record)
            await self.db.flush()
            sync = await self._push(domain, "delete", {"id": record_id})
            result_record = None
        else:
            record.status = RECORD_DELETED
            record.updated_at = utcnow()
            await self.db.flush()
            sync = await self._push(domain, "delete", self.payload(domain, record))
            self._mark_synced(record, sync)
            result_record = record

        await log_activity(
            self.db, self.user,
            action="purged" if hard else "deleted",
            entity_type=domain.name,
            entity_id=record_id,
            summary=f"Deleted {domain.label}: {title}",
            details={"synced": sync.success, "sync_error": sync.error},
        )
        await self.db.flush()
        return result_record, sync

    async def refresh(self, domain: RecordDomain) -> RefreshResult:
        """Pull the sheet and upsert its rows by id.

        Rows the sheet does not know about stay untouched, so records whose
        push failed are not lost. Rows that fail validation are skipped.
        """
        fetched = await self.sheets.fetch(domain.sheet_domain)
        if not fetched.success:
            return RefreshResult(error=fetched.error)

        result = RefreshResult(fetched=len(fetched.rows))
        now = utcnow()
        for row in fetched.rows:
            record_id = row.get("id")
            if not record_id:
                result.skipped += 1
                continue
            try:
                body = domain.create_schema.model_validate(
                    {k: v for k, v in row.items() if k != "id"}
                )
            except ValidationError as e:
                logger.info("%s: skipping sheet row %s (%d errors)", domain.name, record_id, e.error_count())
                result.skipped += 1
                continue

            data = body.model_dump(exclude={"id"})
            status = row.get("status") if row.get("status") in (RECORD_ACTIVE, RECORD_DELETED) else None
            record = await self.db.get(domain.model, str(record_id))
            if record is None:
                record = domain.model(
                    id=str(record_id),
                    created_by=row.get("created_by") or self._user_name,
                    created_at=_parse_timestamp(row.get("created_at")) or now,
                    status=status or RECORD_ACTIVE,
                    **data,
                )
                self.db.add(record)
                result.created += 1
            else:
                for key, value in data.items():
                    setattr(record, key, value)
                if status:
                    record.status = status
                record.updated_at = _parse_timestamp(row.get("updated_at")) or record.updated_at
                result.updated += 1
            if domain.derive:
                domain.derive(record)
            record.synced_at = now
            record.sync_error = None

        await log_activity(
            self.db, self.user,
            action="refreshed",
            entity_type=domain.name,
            summary=(
                f"Pulled {result.fetched} {domain.name} rows: "
                f"{result.created} new, {result.updated} updated, {result.skipped} skipped"
            ),
        )
        await self.db.flush()
        return result

    # ── Sync helpers ────────────────────────────────────────

    def payload(self, domain: RecordDomain, record) -> dict:
        return domain.out_schema.model_validate(record).model_dump(mode="json")

    async def _push(self, domain: RecordDomain, action: str, payload: dict) -> SyncResult:
        remote_action = domain.actions.get(action, action)
        if domain.form_encoded:
            return await self.sheets.push_form(domain.sheet_domain, remote_action, payload)
        return await self.sheets.push(domain.sheet_domain, remote_action, payload)

    @staticmethod
    def _mark_synced(record, sync: SyncResult) -> None:
        if sync.success:
            record.synced_at = utcnow()
            record.sync_error = None
        else:
            record.sync_error = sync.error
