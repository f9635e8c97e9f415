"""Bulk CSV import for the supplier list and staff list.

Endpoints:
    GET  /api/bulk-import/suppliers/template   Download supplier CSV template
    POST /api/bulk-import/suppliers/upload     Upload supplier CSV
    GET  /api/bulk-import/staff/template       Download staff CSV template
    POST /api/bulk-import/staff/upload         Upload staff CSV

Imported rows are stored locally only; each record is pushed to its
sheet the next time it is edited.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.models.record import RECORD_ACTIVE, RECORD_DELETED
from taquero.models.staff import StaffMember
from taquero.models.supplier import SupplierRecord
from taquero.services.records import utcnow
from taquero.utils.activity import log_activity
from taquero.utils.csv_import import (
    FieldDef,
    coerce_date,
    coerce_email,
    coerce_weekdays,
    generate_template_csv,
    parse_csv,
)
from taquero.utils.ids import generate_record_id

router = APIRouter()


# ── Response schema ─────────────────────────────────────────


class RowErrorOut(BaseModel):
    row: int
    errors: list[str]


class BulkImportResult(BaseModel):
    total_rows: int
    created: int
    updated: int
    failed: int
    errors: list[RowErrorOut]


# ── Field definitions ───────────────────────────────────────

SUPPLIER_FIELDS = [
    FieldDef(column="business_name", db_field="business_name", required=True),
    FieldDef(column="site_registration_number", db_field="site_registration_number"),
    FieldDef(column="contact_person", db_field="contact_person"),
    FieldDef(column="phone", db_field="phone"),
    FieldDef(column="email", db_field="email", coerce=coerce_email),
    FieldDef(column="address", db_field="address"),
    FieldDef(column="order_days", db_field="order_days", coerce=coerce_weekdays),
    FieldDef(column="delivery_days", db_field="delivery_days", coerce=coerce_weekdays),
    FieldDef(column="custom_arrangement", db_field="custom_arrangement"),
    FieldDef(column="goods_supplied", db_field="goods_supplied"),
    FieldDef(column="comments", db_field="comments"),
]

SUPPLIER_SAMPLE = {
    "business_name": "Fresh Produce Ltd",
    "site_registration_number": "RMP-12345",
    "contact_person": "Sam Lee",
    "phone": "021 555 0101",
    "email": "orders@freshproduce.co.nz",
    "address": "12 Market Road, Auckland",
    "order_days": "Monday|Thursday",
    "delivery_days": "Tuesday|Friday",
    "custom_arrangement": "",
    "goods_supplied": "Vegetables, herbs",
    "comments": "",
}

STAFF_FIELDS = [
    FieldDef(column="name", db_field="name", required=True),
    FieldDef(column="role", db_field="role"),
    FieldDef(column="start_date", db_field="start_date", coerce=coerce_date),
    FieldDef(column="notes", db_field="notes"),
]

STAFF_SAMPLE = {
    "name": "Alex",
    "role": "Cook",
    "start_date": "2024-02-01",
    "notes": "",
}

_LIST_FIELDS = ("order_days", "delivery_days")


# ── Helpers ─────────────────────────────────────────────────


def _csv_response(csv_text: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _upsert_by_name(
    db: AsyncSession,
    model_class,
    rows: list[dict],
    name_field: str,
    id_prefix: str,
    user: StaffUser,
) -> tuple[int, int]:
    """Upsert parsed rows by name among live records. Returns (created_count, updated_count)."""
    result = await db.execute(
        select(model_class).where(model_class.status != RECORD_DELETED)
    )
    existing = {getattr(r, name_field): r for r in result.scalars().all()}

    created = 0
    updated = 0
    now = utcnow()

    for row_data in rows:
        name = row_data.get(name_field)
        if not name:
            continue

        if name in existing:
            record = existing[name]
            for key, value in row_data.items():
                if value is not None:
                    setattr(record, key, value)
            record.updated_at = now
            updated += 1
        else:
            values = {
                k: ([] if v is None and k in _LIST_FIELDS else v)
                for k, v in row_data.items()
            }
            record = model_class(
                id=generate_record_id(id_prefix),
                created_by=user.name,
                created_at=now,
                status=RECORD_ACTIVE,
                **values,
            )
            db.add(record)
            existing[name] = record
            created += 1

    await db.flush()
    return created, updated


async def _import(
    db: AsyncSession,
    user: StaffUser,
    file: UploadFile,
    fields: list[FieldDef],
    model_class,
    name_field: str,
    id_prefix: str,
    entity_type: str,
) -> BulkImportResult:
    parsed = await parse_csv(file, fields)
    created, updated = await _upsert_by_name(
        db, model_class, parsed.rows, name_field, id_prefix, user
    )

    await log_activity(
        db, user,
        action="bulk_import",
        entity_type=entity_type,
        summary=f"CSV import: {created} created, {updated} updated, {len(parsed.errors)} failed",
    )

    return BulkImportResult(
        total_rows=parsed.total_rows,
        created=created,
        updated=updated,
        failed=len(parsed.errors),
        errors=[RowErrorOut(row=e.row, errors=e.errors) for e in parsed.errors],
    )


# ══════════════════════════════════════════════════════════════
# SUPPLIERS
# ══════════════════════════════════════════════════════════════


@router.get("/suppliers/template")
async def supplier_template(_user: StaffUser = Depends(get_current_user)):
    csv_text = generate_template_csv(SUPPLIER_FIELDS, SUPPLIER_SAMPLE)
    return _csv_response(csv_text, "suppliers_template.csv")


@router.post("/suppliers/upload", response_model=BulkImportResult)
async def upload_suppliers(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    return await _import(
        db, user, file, SUPPLIER_FIELDS, SupplierRecord,
        name_field="business_name", id_prefix="supplier", entity_type="suppliers",
    )


# ══════════════════════════════════════════════════════════════
# STAFF
# ══════════════════════════════════════════════════════════════


@router.get("/staff/template")
async def staff_template(_user: StaffUser = Depends(get_current_user)):
    csv_text = generate_template_csv(STAFF_FIELDS, STAFF_SAMPLE)
    return _csv_response(csv_text, "staff_template.csv")


@router.post("/staff/upload", response_model=BulkImportResult)
async def upload_staff(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    return await _import(
        db, user, file, STAFF_FIELDS, StaffMember,
        name_field="name", id_prefix="staff", entity_type="staff",
    )
