from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class StaffSickness(RecordMixin, Base):
    __tablename__ = "staff_sickness"

    staff_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    symptoms: Mapped[str] = mapped_column(Text, nullable=False)
    date_sick: Mapped[str] = mapped_column(String(10), nullable=False)
    date_returned: Mapped[str | None] = mapped_column(String(10))
    action_taken: Mapped[str | None] = mapped_column(Text)
    checked_by: Mapped[str] = mapped_column(String(100), nullable=False)
    # sick | recovered
    sickness_status: Mapped[str] = mapped_column(String(20), default="sick", index=True)
