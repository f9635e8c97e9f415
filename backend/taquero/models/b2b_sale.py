from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class B2BSale(RecordMixin, Base):
    __tablename__ = "b2b_sales"

    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_details: Mapped[str | None] = mapped_column(String(255))
    product_supplied: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="kg")
    date_supplied: Mapped[str] = mapped_column(String(10), nullable=False)
    task_done_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
