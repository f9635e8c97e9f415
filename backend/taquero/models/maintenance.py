from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class MaintenanceRecord(RecordMixin, Base):
    """Equipment and facility upkeep, water supply checks included."""

    __tablename__ = "maintenance_records"

    equipment_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_completed: Mapped[str] = mapped_column(String(10), nullable=False)
    performed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    maintenance_description: Mapped[str] = mapped_column(Text, nullable=False)
    checking_frequency: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
