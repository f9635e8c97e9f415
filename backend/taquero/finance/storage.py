"""Database-backed storage for imported finance months and payee categories."""

import logging
from datetime import date, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.finance.categories import Classification
from taquero.finance.data import ImportedData
from taquero.finance.dates import month_key, parse_finance_date
from taquero.models.finance import FinanceMonth, PayeeClassification

logger = logging.getLogger(__name__)


def detect_month(data: ImportedData, year: int | None = None) -> str:
    """Month of the first daily-sales row, else the first bank row, else now."""
    for rows in (data.sales_by_day, data.bank_transactions):
        if rows:
            d = parse_finance_date(rows[0].date, year)
            if d is not None:
                return month_key(d)
    return month_key(date.today())


async def get_month(db: AsyncSession, month: str) -> FinanceMonth | None:
    result = await db.execute(select(FinanceMonth).where(FinanceMonth.month == month))
    return result.scalar_one_or_none()


async def save_month(
    db: AsyncSession,
    month: str,
    data: ImportedData,
    uploaded_by: str | None = None,
) -> FinanceMonth:
    """Store ``data`` as ``month``, replacing whatever that month held."""
    row = await get_month(db, month)
    if row is None:
        row = FinanceMonth(month=month, data=data.to_dict(), uploaded_by=uploaded_by)
        db.add(row)
    else:
        row.data = data.to_dict()
        row.uploaded_by = uploaded_by
        row.uploaded_at = datetime.utcnow()
    await db.flush()
    logger.info("Saved finance data for %s", month)
    return row


async def list_months(db: AsyncSession) -> list[FinanceMonth]:
    result = await db.execute(select(FinanceMonth).order_by(FinanceMonth.month.desc()))
    return list(result.scalars().all())


async def load_months(db: AsyncSession, months: list[str] | None = None) -> list[ImportedData]:
    stmt = select(FinanceMonth).order_by(FinanceMonth.month)
    if months:
        stmt = stmt.where(FinanceMonth.month.in_(months))
    result = await db.execute(stmt)
    return [ImportedData.from_dict(row.data) for row in result.scalars().all()]


async def delete_month(db: AsyncSession, month: str | None = None) -> int:
    """Delete one month, or every month when ``month`` is None."""
    stmt = delete(FinanceMonth)
    if month is not None:
        stmt = stmt.where(FinanceMonth.month == month)
    result = await db.execute(stmt)
    await db.flush()
    return result.rowcount or 0


async def load_classifications(db: AsyncSession) -> dict[str, Classification]:
    result = await db.execute(select(PayeeClassification))
    return {
        row.payee: Classification(
            payee=row.payee,
            category=row.category,
            user_correction=row.user_correction,
            confidence=row.confidence,
        )
        for row in result.scalars().all()
    }


async def upsert_classifications(
    db: AsyncSession,
    entries: list[Classification],
) -> tuple[int, int]:
    """Upsert by payee. Returns (created_count, updated_count)."""
    result = await db.execute(select(PayeeClassification))
    existing = {row.payee: row for row in result.scalars().all()}

    created = 0
    updated = 0
    for entry in entries:
        row = existing.get(entry.payee)
        if row is None:
            row = PayeeClassification(
                payee=entry.payee,
                category=entry.category,
                user_correction=entry.user_correction,
                confidence=entry.confidence,
            )
            db.add(row)
            existing[entry.payee] = row
            created += 1
        else:
            row.category = entry.category
            row.user_correction = entry.user_correction
            row.confidence = entry.confidence
            updated += 1

    await db.flush()
    return created, updated
