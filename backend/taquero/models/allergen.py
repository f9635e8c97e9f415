from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taquero.database import Base
from taquero.models.record import RecordMixin


class AllergenRecord(RecordMixin, Base):
    __tablename__ = "allergen_records"

    dish_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False)
    allergens: Mapped[list] = mapped_column(JSON, default=list)
