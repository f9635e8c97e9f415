"""Pydantic schemas for dish allergen records."""

from pydantic import BaseModel, Field, field_validator

from taquero.schemas.common import RecordOut
from taquero.schemas.validators import NonBlank

# NZ MPI declarable allergens, grouped the way the picker shows them
ALLERGEN_GROUPS: dict[str, list[str]] = {
    "common": [
        "Gluten (wheat, barley, rye, oats)",
        "Wheat",
        "Milk",
        "Egg",
        "Soy",
        "Peanuts",
        "Fish",
        "Sesame",
        "Sulphites",
    ],
    "tree_nuts": [
        "Almonds",
        "Brazil nuts",
        "Cashews",
        "Hazelnuts",
        "Macadamias",
        "Pecans",
        "Pine nuts",
        "Pistachios",
        "Walnuts",
    ],
    "shellfish": [
        "Crustacea (prawns, crab)",
        "Molluscs (mussels, oysters)",
    ],
    "other": [
        "Lupin",
    ],
}

KNOWN_ALLERGENS = frozenset(a for group in ALLERGEN_GROUPS.values() for a in group)


def _known_allergens(v: list[str]) -> list[str]:
    unknown = [a for a in v if a not in KNOWN_ALLERGENS]
    if unknown:
        raise ValueError(f"Unknown allergen(s): {', '.join(unknown)}")
    # Keep picker order, drop duplicates
    return list(dict.fromkeys(v))


class AllergenCreate(BaseModel):
    id: str | None = None
    dish_name: NonBlank = Field(..., max_length=255)
    ingredients: NonBlank
    allergens: list[str] = []

    @field_validator("allergens")
    @classmethod
    def _check_allergens(cls, v: list[str]) -> list[str]:
        return _known_allergens(v)


class AllergenUpdate(BaseModel):
    dish_name: NonBlank | None = None
    ingredients: NonBlank | None = None
    allergens: list[str] | None = None

    @field_validator("allergens")
    @classmethod
    def _check_allergens(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _known_allergens(v)


class AllergenOut(RecordOut):
    dish_name: str
    ingredients: str
    allergens: list[str]
