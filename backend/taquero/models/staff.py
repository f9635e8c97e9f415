"""Staff members and the training records they own (MPI training log)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taquero.database import Base
from taquero.models.record import RecordMixin


class StaffMember(RecordMixin, Base):
    __tablename__ = "staff_members"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    role: Mapped[str | None] = mapped_column(String(100))
    start_date: Mapped[str | None] = mapped_column(String(10))
    notes: Mapped[str | None] = mapped_column(Text)

    training_records = relationship(
        "TrainingRecord",
        back_populates="staff",
        cascade="all, delete-orphan",
        order_by=lambda: TrainingRecord.date.desc(),
        lazy="selectin",
    )


class TrainingRecord(Base):
    __tablename__ = "training_records"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    staff_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("staff_members.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    training_type: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    trainer: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime)

    staff = relationship("StaffMember", back_populates="training_records")
