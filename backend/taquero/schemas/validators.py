"""Reusable field types for record schemas.

Dates and times stay strings (``YYYY-MM-DD`` / ``HH:MM``) because that
is how they travel to and from the spreadsheets.
"""

import re
from typing import Annotated

from pydantic import AfterValidator, Field

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Must not be blank")
    return value


def _email(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    value = value.strip().lower()
    if not EMAIL_REGEX.match(value):
        raise ValueError("Invalid email address")
    return value


NonBlank = Annotated[str, AfterValidator(_not_blank)]
DateStr = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]
TimeStr = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
OptionalEmail = Annotated[str | None, AfterValidator(_email)]
