from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class IncidentRecord(RecordMixin, Base):
    __tablename__ = "incident_records"

    incident_date: Mapped[str] = mapped_column(String(10), nullable=False)
    person_responsible: Mapped[str] = mapped_column(String(100), nullable=False)
    staff_involved: Mapped[str | None] = mapped_column(String(255))
    # equipment-failure | temperature-issue | contamination |
    # supplier-problem | staff-error | facility-issue | other
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    what_went_wrong: Mapped[str] = mapped_column(Text, nullable=False)
    what_did_to_fix: Mapped[str] = mapped_column(Text, nullable=False)
    preventive_action: Mapped[str | None] = mapped_column(Text)
    severity: Mapped[str] = mapped_column(String(10), default="minor")
    incident_status: Mapped[str] = mapped_column(String(20), default="open", index=True)
    follow_up_date: Mapped[str | None] = mapped_column(String(10))
    notes: Mapped[str | None] = mapped_column(Text)
