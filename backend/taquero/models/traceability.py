from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class TraceabilityRecord(RecordMixin, Base):
    """A trace exercise: one product followed back to its supplier and maker."""

    __tablename__ = "traceability_records"

    trace_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    product_type: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str] = mapped_column(String(255), nullable=False)
    batch_lot_info: Mapped[str] = mapped_column(String(255), nullable=False)
    supplier_name: Mapped[str] = mapped_column(String(255), nullable=False)
    supplier_contact: Mapped[str] = mapped_column(String(255), nullable=False)
    # Same as the supplier unless entered separately
    manufacturer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    manufacturer_contact: Mapped[str] = mapped_column(String(255), nullable=False)
    date_received: Mapped[str | None] = mapped_column(String(10))
    performed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    other_info: Mapped[str | None] = mapped_column(Text)
