"""Finance router: POS and bank CSV imports, stored months, dashboard.

Endpoints:
    POST   /api/finance/upload                    Upload one or more CSV exports
    GET    /api/finance/months                    Stored months, newest first
    DELETE /api/finance/months/{month}            Delete one month
    DELETE /api/finance/months                    Delete every month
    GET    /api/finance/dashboard                 Metrics + health score (cached)
    GET    /api/finance/cash-flow                 Income/expense per period
    GET    /api/finance/sales                     POS totals per period
    GET    /api/finance/classifications           Payee → category table
    POST   /api/finance/classifications/import    Bulk import classifications CSV
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.finance import storage
from taquero.finance.aggregation import (
    aggregate_cash_flow,
    aggregate_sales,
    combine_months,
    filter_by_date_range,
)
from taquero.finance.categories import parse_classifications_csv
from taquero.finance.data import ImportedData
from taquero.finance.importer import overlay, parse_uploads
from taquero.finance.metrics import calculate_metrics, date_range_summary
from taquero.middleware.exceptions import CSVFormatError, ResourceNotFoundError
from taquero.models.finance import PayeeClassification
from taquero.schemas.finance import (
    CashFlowPoint,
    ClassificationImportResult,
    ClassificationOut,
    DeletedMonths,
    FinanceDashboard,
    FinanceMonthOut,
    FinanceUploadResult,
    SalesPoint,
)
from taquero.utils.activity import log_activity
from taquero.utils.cache import cached, invalidate_cache

logger = logging.getLogger(__name__)

router = APIRouter()

DASHBOARD_PERIODS = ("week", "month", "quarter")


async def _read_text(file: UploadFile) -> str:
    content = await file.read()
    return content.decode("utf-8-sig", errors="replace")


async def _selected(
    db: AsyncSession,
    months: list[str] | None,
    start: date | None,
    end: date | None,
    year: int | None,
) -> ImportedData:
    data = combine_months(await storage.load_months(db, months), year)
    return filter_by_date_range(data, start, end, year)


def _cash_flow(data: ImportedData, period: str, year: int | None) -> list[CashFlowPoint]:
    return [
        CashFlowPoint(
            period_start=b.period_start,
            income=b.income,
            expense=b.expense,
            net=b.net,
            transactions=b.transactions,
        )
        for b in aggregate_cash_flow(data.bank_transactions, period, year)
    ]


# ── Upload ──────────────────────────────────────────────────


@router.post("/upload", response_model=FinanceUploadResult)
async def upload_finance_files(
    files: list[UploadFile] = File(...),
    year: int | None = Form(None),
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    """Import POS and bank exports into the month they belong to.

    POS reports replace the same report for that month; bank statements
    are appended to the month's transactions.
    """
    pairs = [(f.filename or "upload", await _read_text(f)) for f in files]
    outcome = parse_uploads(pairs)
    if not outcome.processed:
        raise CSVFormatError("None of the uploaded files could be imported", errors=outcome.errors)

    month = storage.detect_month(outcome.data, year)
    existing = await storage.get_month(db, month)
    base = ImportedData.from_dict(existing.data) if existing else ImportedData()
    merged = overlay(base, outcome)
    await storage.save_month(db, month, merged, uploaded_by=user.name)

    await log_activity(
        db, user,
        action="uploaded",
        entity_type="finance",
        entity_id=month,
        summary=f"Finance upload for {month}: {', '.join(outcome.processed)}",
        details={"errors": outcome.errors} if outcome.errors else None,
    )
    await invalidate_cache("finance:*")
    return FinanceUploadResult(month=month, processed=outcome.processed, errors=outcome.errors)


# ── Months ──────────────────────────────────────────────────


@router.get("/months", response_model=list[FinanceMonthOut])
async def list_finance_months(
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    rows = await storage.list_months(db)
    out = []
    for row in rows:
        data = ImportedData.from_dict(row.data)
        out.append(FinanceMonthOut(
            month=row.month,
            uploaded_by=row.uploaded_by,
            uploaded_at=row.uploaded_at,
            days=len(data.sales_by_day),
            transactions=len(data.bank_transactions),
            date_range_start=data.date_range_start,
            date_range_end=data.date_range_end,
        ))
    return out


@router.delete("/months/{month}", response_model=DeletedMonths)
async def delete_finance_month(
    month: str,
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    deleted = await storage.delete_month(db, month)
    if not deleted:
        raise ResourceNotFoundError("Finance month", month)
    await log_activity(
        db, user, action="deleted", entity_type="finance", entity_id=month,
        summary=f"Deleted finance data for {month}",
    )
    await invalidate_cache("finance:*")
    return DeletedMonths(deleted=deleted)


@router.delete("/months", response_model=DeletedMonths)
async def delete_all_finance_months(
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    deleted = await storage.delete_month(db)
    await log_activity(
        db, user, action="deleted", entity_type="finance",
        summary=f"Cleared all finance data ({deleted} months)",
    )
    await invalidate_cache("finance:*")
    return DeletedMonths(deleted=deleted)


# ── Dashboard & series ──────────────────────────────────────


@router.get("/dashboard", response_model=FinanceDashboard)
@cached(ttl=300, prefix="finance")
async def finance_dashboard(
    months: list[str] | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    year: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    """Metrics and health score for the selected months (default: all).

    Cached for 5 minutes; every upload or delete clears the cache.
    """
    data = await _selected(db, months, start, end, year)
    table = await storage.load_classifications(db)
    selected = months or [row.month for row in await storage.list_months(db)]
    return FinanceDashboard(
        months=sorted(selected),
        summary=date_range_summary(data, start, end),
        metrics=calculate_metrics(data, table, year),
        cash_flow={p: _cash_flow(data, p, year) for p in DASHBOARD_PERIODS},
    )


@router.get("/cash-flow", response_model=list[CashFlowPoint])
async def cash_flow(
    period: str = Query("week", pattern="^(day|week|month|quarter)$"),
    months: list[str] | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    year: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    data = await _selected(db, months, start, end, year)
    return _cash_flow(data, period, year)


@router.get("/sales", response_model=list[SalesPoint])
async def sales(
    period: str = Query("week", pattern="^(day|week|month|quarter)$"),
    months: list[str] | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    year: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    data = await _selected(db, months, start, end, year)
    return [
        SalesPoint(period_start=b.period_start, total=b.total, orders=b.orders, days=b.days)
        for b in aggregate_sales(data.sales_by_day, period, year)
    ]


# ── Payee classifications ───────────────────────────────────


@router.get("/classifications", response_model=list[ClassificationOut])
async def list_classifications(
    db: AsyncSession = Depends(get_db),
    _user: StaffUser = Depends(get_current_user),
):
    result = await db.execute(select(PayeeClassification).order_by(PayeeClassification.payee))
    return [ClassificationOut.model_validate(r) for r in result.scalars().all()]


@router.post("/classifications/import", response_model=ClassificationImportResult)
async def import_classifications(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    entries = parse_classifications_csv(await _read_text(file))
    if not entries:
        raise CSVFormatError("No classifications found in file")
    created, updated = await storage.upsert_classifications(db, entries)

    await log_activity(
        db, user,
        action="imported",
        entity_type="payee_classifications",
        summary=f"CSV import: {created} created, {updated} updated",
    )
    await invalidate_cache("finance:*")
    return ClassificationImportResult(total_rows=len(entries), created=created, updated=updated)
