"""Pydantic schemas for finance uploads, stored months and the dashboard."""

from datetime import date, datetime

from pydantic import BaseModel


class FinanceUploadResult(BaseModel):
    month: str
    processed: list[str]
    errors: list[str] = []


class FinanceMonthOut(BaseModel):
    month: str
    uploaded_by: str | None
    uploaded_at: datetime | None
    days: int
    transactions: int
    date_range_start: str | None = None
    date_range_end: str | None = None


class DeletedMonths(BaseModel):
    deleted: int


class CashFlowPoint(BaseModel):
    period_start: date
    income: float
    expense: float
    net: float
    transactions: int


class SalesPoint(BaseModel):
    period_start: date
    total: float
    orders: int
    days: int


class FinanceDashboard(BaseModel):
    """Everything the finance page draws, for the selected months."""
    months: list[str]
    summary: dict
    metrics: dict
    cash_flow: dict[str, list[CashFlowPoint]]


class ClassificationOut(BaseModel):
    payee: str
    category: str
    user_correction: str | None = None
    confidence: str | None = None

    model_config = {"from_attributes": True}


class ClassificationImportResult(BaseModel):
    total_rows: int
    created: int
    updated: int
