from sqlalchemy import Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class DeliveryRecord(RecordMixin, Base):
    __tablename__ = "delivery_records"

    delivery_date: Mapped[str] = mapped_column(String(10), nullable=False)
    supplier_name: Mapped[str] = mapped_column(String(255), nullable=False)
    supplier_contact: Mapped[str | None] = mapped_column(String(255))
    batch_lot_id: Mapped[str | None] = mapped_column(String(100))
    type_of_food: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[float | None] = mapped_column(Float)
    unit: Mapped[str | None] = mapped_column(String(20))
    requires_temp_check: Mapped[bool] = mapped_column(Boolean, default=False)
    temperature: Mapped[float | None] = mapped_column(Float)
    temperature_warning: Mapped[str | None] = mapped_column(String(255))
    task_done_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
