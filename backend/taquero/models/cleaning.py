from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class CleaningRecord(RecordMixin, Base):
    __tablename__ = "cleaning_records"

    cleaning_task: Mapped[str] = mapped_column(String(255), nullable=False)
    date_completed: Mapped[str] = mapped_column(String(10), nullable=False)
    cleaning_method: Mapped[str | None] = mapped_column(Text)
    completed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
