"""Caravan (food truck) events: festivals, markets and private bookings."""

from sqlalchemy import Boolean, Float, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class CaravanEvent(RecordMixin, Base):
    __tablename__ = "caravan_events"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # festival | recurrent | private
    event_type: Mapped[str] = mapped_column(String(20), default="festival")
    # discovered → interested → applied → accepted → paid → confirmed →
    # active → completed, or denied / cancelled_by_us /
    # cancelled_by_organizer / postponed
    event_status: Mapped[str] = mapped_column(String(30), default="discovered", index=True)
    # ISO dates, first entry is the opening day
    dates: Mapped[list] = mapped_column(JSON, default=list)
    year: Mapped[int | None] = mapped_column(Integer, index=True)
    location: Mapped[str | None] = mapped_column(String(255))

    organizer_name: Mapped[str | None] = mapped_column(String(255))
    organizer_email: Mapped[str | None] = mapped_column(String(255))
    organizer_phone: Mapped[str | None] = mapped_column(String(50))
    website_url: Mapped[str | None] = mapped_column(String(500))

    fee_amount: Mapped[float | None] = mapped_column(Float)
    fee_paid: Mapped[bool] = mapped_column(Boolean, default=False)
    power_available: Mapped[bool] = mapped_column(Boolean, default=False)
    generator_needed: Mapped[bool] = mapped_column(Boolean, default=False)
    expected_revenue: Mapped[float | None] = mapped_column(Float)
    actual_revenue: Mapped[float | None] = mapped_column(Float)

    notes: Mapped[str | None] = mapped_column(Text)
