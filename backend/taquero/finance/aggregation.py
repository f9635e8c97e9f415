"""Bucket bank transactions and daily sales into calendar periods.

Periods are ``day``, ``week`` (starting Monday), ``month`` and
``quarter``. Bucketing only groups rows, so the daily buckets inside a
period always add up to that period's bucket.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date, timedelta

from taquero.finance.data import (
    BankTransaction,
    ImportedData,
    SalesByCategory,
    SalesByDay,
    SalesByProduct,
)
from taquero.finance.dates import parse_finance_date

PERIODS = ("day", "week", "month", "quarter")


def period_start(d: date, period: str) -> date:
    if period == "day":
        return d
    if period == "week":
        return d - timedelta(days=d.weekday())
    if period == "month":
        return d.replace(day=1)
    if period == "quarter":
        return date(d.year, 3 * ((d.month - 1) // 3) + 1, 1)
    raise ValueError(f"Unknown period: {period}")


@dataclass
class CashFlowBucket:
    period_start: date
    income: float = 0.0
    expense: float = 0.0
    transactions: int = 0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass
class SalesBucket:
    period_start: date
    total: float = 0.0
    orders: int = 0
    days: int = 0


def aggregate_cash_flow(
    transactions: list[BankTransaction],
    period: str,
    year: int | None = None,
) -> list[CashFlowBucket]:
    """Income/expense/net per period. Rows with unreadable dates are skipped."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")

    income: dict[date, list[float]] = defaultdict(list)
    expense: dict[date, list[float]] = defaultdict(list)
    counts: dict[date, int] = defaultdict(int)
    for tx in transactions:
        d = parse_finance_date(tx.date, year)
        if d is None:
            continue
        key = period_start(d, period)
        counts[key] += 1
        if tx.type == "income":
            income[key].append(tx.amount)
        else:
            expense[key].append(tx.amount)

    return [
        CashFlowBucket(
            period_start=key,
            income=math.fsum(income[key]),
            expense=math.fsum(expense[key]),
            transactions=counts[key],
        )
        for key in sorted(counts)
    ]


def aggregate_sales(
    sales: list[SalesByDay],
    period: str,
    year: int | None = None,
) -> list[SalesBucket]:
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")

    buckets: dict[date, SalesBucket] = {}
    totals: dict[date, list[float]] = defaultdict(list)
    for day in sales:
        d = parse_finance_date(day.date, year)
        if d is None:
            continue
        key = period_start(d, period)
        bucket = buckets.setdefault(key, SalesBucket(period_start=key))
        bucket.orders += day.orders
        bucket.days += 1
        totals[key].append(day.total)

    for key, bucket in buckets.items():
        bucket.total = math.fsum(totals[key])
    return [buckets[k] for k in sorted(buckets)]


def filter_by_date_range(
    data: ImportedData,
    start: date | None,
    end: date | None,
    year: int | None = None,
) -> ImportedData:
    """Keep dated rows inside [start, end].

    Hourly, category and product reports are already totals for the whole
    export, so they pass through untouched. Unreadable dates are kept.
    """
    if start is None and end is None:
        return data

    def in_range(value: str) -> bool:
        d = parse_finance_date(value, year)
        if d is None:
            return True
        if start and d < start:
            return False
        if end and d > end:
            return False
        return True

    return replace(
        data,
        sales_by_day=[s for s in data.sales_by_day if in_range(s.date)],
        bank_transactions=[t for t in data.bank_transactions if in_range(t.date)],
        supplier_purchases=[p for p in data.supplier_purchases if in_range(p.date)],
    )


def _merge_totals(rows, key: str):
    merged = {}
    for row in rows:
        name = getattr(row, key)
        if name in merged:
            existing = merged[name]
            existing.quantity += row.quantity
            existing.tax += row.tax
            existing.total += row.total
        else:
            merged[name] = replace(row)
    grand_total = sum(r.total for r in merged.values())
    for r in merged.values():
        r.percent_of_sale = (r.total / grand_total) * 100 if grand_total > 0 else 0.0
    return list(merged.values())


def aggregate_products(rows: list[SalesByProduct]) -> list[SalesByProduct]:
    return _merge_totals(rows, "product")


def aggregate_categories(rows: list[SalesByCategory]) -> list[SalesByCategory]:
    return _merge_totals(rows, "category")


def combine_months(months: list[ImportedData], year: int | None = None) -> ImportedData:
    """Concatenate several months; products and categories are re-totalled."""
    combined = ImportedData()
    for data in months:
        combined.sales_by_day.extend(data.sales_by_day)
        combined.sales_by_hour.extend(data.sales_by_hour)
        combined.sales_by_category.extend(data.sales_by_category)
        combined.sales_by_product.extend(data.sales_by_product)
        combined.bank_transactions.extend(data.bank_transactions)
        combined.supplier_purchases.extend(data.supplier_purchases)

    combined.sales_by_day.sort(
        key=lambda s: parse_finance_date(s.date, year) or date.max
    )
    if combined.sales_by_day:
        combined.date_range_start = combined.sales_by_day[0].date
        combined.date_range_end = combined.sales_by_day[-1].date

    combined.sales_by_product = aggregate_products(combined.sales_by_product)
    combined.sales_by_category = aggregate_categories(combined.sales_by_category)
    return combined
