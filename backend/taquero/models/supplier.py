from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class SupplierRecord(RecordMixin, Base):
    __tablename__ = "supplier_records"

    business_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    site_registration_number: Mapped[str | None] = mapped_column(String(100))
    contact_person: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(Text)
    # Weekday names, e.g. ["Monday", "Thursday"]
    order_days: Mapped[list] = mapped_column(JSON, default=list)
    delivery_days: Mapped[list] = mapped_column(JSON, default=list)
    custom_arrangement: Mapped[str | None] = mapped_column(Text)
    goods_supplied: Mapped[str | None] = mapped_column(Text)
    comments: Mapped[str | None] = mapped_column(Text)
