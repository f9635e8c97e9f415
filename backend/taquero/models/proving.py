"""Proving methods: a food-handling procedure validated by three batches.

One table serves the cooking, cooling and reheating variants; ``kind``
says which rule each batch is judged against.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taquero.database import Base
from taquero.models.record import RecordMixin

METHOD_IN_PROGRESS = "in-progress"
METHOD_PROVEN = "proven"


class ProvingMethod(RecordMixin, Base):
    __tablename__ = "proving_methods"

    # cooking | cooling | reheating
    kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    item_description: Mapped[str] = mapped_column(String(255), nullable=False)
    # cooking method / cooling method / reheating method, free text
    process_description: Mapped[str] = mapped_column(Text, nullable=False)
    method_status: Mapped[str] = mapped_column(
        String(20), default=METHOD_IN_PROGRESS, nullable=False, index=True
    )
    proven_at: Mapped[datetime | None] = mapped_column(DateTime)

    batches = relationship(
        "ProvingBatch",
        back_populates="method",
        cascade="all, delete-orphan",
        order_by=lambda: ProvingBatch.batch_number,
        lazy="selectin",
    )


class ProvingBatch(Base):
    __tablename__ = "proving_batches"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    method_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("proving_methods.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    batch_number: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)

    # Cooking / reheating: core temperature and how long it was held
    temperature: Mapped[float | None] = mapped_column(Float)
    time_at_temp: Mapped[str | None] = mapped_column(String(50))

    # Cooling: three timed readings
    start_time: Mapped[str | None] = mapped_column(String(5))
    start_temp: Mapped[float | None] = mapped_column(Float)
    second_time: Mapped[str | None] = mapped_column(String(5))
    second_temp: Mapped[float | None] = mapped_column(Float)
    third_time: Mapped[str | None] = mapped_column(String(5))
    third_temp: Mapped[float | None] = mapped_column(Float)

    completed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    method = relationship("ProvingMethod", back_populates="batches")
