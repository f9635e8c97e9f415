"""Imported finance data, one row per calendar month, plus payee categories."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base


class FinanceMonth(Base):
    __tablename__ = "finance_months"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # YYYY-MM
    month: Mapped[str] = mapped_column(String(7), nullable=False, unique=True)
    # ImportedData.to_dict()
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    uploaded_by: Mapped[str | None] = mapped_column(String(100))
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class PayeeClassification(Base):
    __tablename__ = "payee_classifications"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    payee: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    user_correction: Mapped[str | None] = mapped_column(String(50))
    # High | Medium | Low
    confidence: Mapped[str | None] = mapped_column(String(10))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
