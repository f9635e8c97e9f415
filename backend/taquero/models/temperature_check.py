"""Temperature measurements recorded against fixed food-safety rules.

The derived verdict columns (``temperature_level``, ``is_safe``,
``passed``, ``out_of_range``) are computed from the measurements on
every save.
"""

from sqlalchemy import JSON, Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class TransportTempCheck(RecordMixin, Base):
    __tablename__ = "transport_temp_checks"

    check_date: Mapped[str] = mapped_column(String(10), nullable=False)
    type_of_food: Mapped[str] = mapped_column(String(255), nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    # safe | borderline | unsafe
    temperature_level: Mapped[str] = mapped_column(String(20), nullable=False)
    task_done_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class BatchCheck(RecordMixin, Base):
    """Cooking / hot-holding check on a batch of protein."""

    __tablename__ = "batch_checks"

    check_date: Mapped[str] = mapped_column(String(10), nullable=False)
    check_time: Mapped[str | None] = mapped_column(String(5))
    food_type: Mapped[str] = mapped_column(String(100), nullable=False)
    # cooking | reheating | hot-holding
    check_type: Mapped[str] = mapped_column(String(20), default="cooking")
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    time_at_temp: Mapped[str | None] = mapped_column(String(50))
    is_safe: Mapped[bool] = mapped_column(Boolean, nullable=False)
    completed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class CoolingBatchCheck(RecordMixin, Base):
    """Two-stage cooling: 60°C → 21°C within 2h, then → 5°C within 4h more."""

    __tablename__ = "cooling_batch_checks"

    food_type: Mapped[str] = mapped_column(String(100), nullable=False)
    date_cooked: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    start_temp: Mapped[float] = mapped_column(Float, default=60.0)
    second_time_check: Mapped[str | None] = mapped_column(String(5))
    second_temp_check: Mapped[float | None] = mapped_column(Float)
    third_time_check: Mapped[str | None] = mapped_column(String(5))
    third_temp_check: Mapped[float | None] = mapped_column(Float)
    cooling_method: Mapped[str | None] = mapped_column(String(100))
    passed: Mapped[bool | None] = mapped_column(Boolean)
    completed_by: Mapped[str] = mapped_column(String(100), nullable=False)


class FridgeTempCheck(RecordMixin, Base):
    """Daily reading of every chiller (in unit order) and the freezer."""

    __tablename__ = "fridge_temp_checks"

    check_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    chillers: Mapped[list] = mapped_column(JSON, nullable=False)
    freezer: Mapped[float] = mapped_column(Float, nullable=False)
    # Unit names outside their range, e.g. ["Chiller #3", "Freezer"]
    out_of_range: Mapped[list] = mapped_column(JSON, default=list)
    all_in_range: Mapped[bool] = mapped_column(Boolean, nullable=False)
    checked_by: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
