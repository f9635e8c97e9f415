from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class ComplaintRecord(RecordMixin, Base):
    __tablename__ = "complaint_records"

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_contact: Mapped[str | None] = mapped_column(String(255))
    purchase_date: Mapped[str] = mapped_column(String(10), nullable=False)
    purchase_time: Mapped[str | None] = mapped_column(String(5))
    food_item: Mapped[str] = mapped_column(String(255), nullable=False)
    batch_lot_number: Mapped[str | None] = mapped_column(String(100))
    complaint_description: Mapped[str] = mapped_column(Text, nullable=False)
    # Illness/Sickness | Foreign Object | Quality Issue | Temperature Issue |
    # Allergen Issue | Other
    complaint_type: Mapped[str] = mapped_column(String(30), nullable=False)
    cause_investigation: Mapped[str | None] = mapped_column(Text)
    action_taken_immediate: Mapped[str | None] = mapped_column(Text)
    action_taken_preventive: Mapped[str | None] = mapped_column(Text)
    resolved_by: Mapped[str | None] = mapped_column(String(100))
    resolution_date: Mapped[str | None] = mapped_column(String(10))
    # open | investigating | resolved
    complaint_status: Mapped[str] = mapped_column(String(20), default="open", index=True)
    linked_incident_id: Mapped[str | None] = mapped_column(String(64))
    notes: Mapped[str | None] = mapped_column(Text)
