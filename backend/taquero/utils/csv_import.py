"""Generic CSV parsing + validation for bulk import."""

import csv
import io
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi import UploadFile

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class FieldDef:
    """Definition for a single CSV column."""
    column: str
    db_field: str
    required: bool = False
    coerce: Callable[[str], Any] | None = None


@dataclass
class RowError:
    row: int
    errors: list[str]


@dataclass
class ParseResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    total_rows: int = 0


def coerce_date(val: str) -> str | None:
    if not val.strip():
        return None
    val = val.strip()
    if not _DATE_RE.match(val):
        raise ValueError(val)
    return val


def coerce_email(val: str) -> str | None:
    val = val.strip().lower()
    if not val:
        return None
    if "@" not in val:
        raise ValueError(val)
    return val


def coerce_weekdays(val: str) -> list[str]:
    """Parse pipe-separated weekdays: 'monday|Thu' -> ['Monday', 'Thursday']"""
    days = []
    for item in val.split("|"):
        item = item.strip().lower()
        if not item:
            continue
        match = next((d for d in WEEKDAYS if d.lower().startswith(item[:3])), None)
        if match is None or len(item) < 3:
            raise ValueError(item)
        if match not in days:
            days.append(match)
    return days


async def parse_csv(file: UploadFile, field_defs: list[FieldDef]) -> ParseResult:
    """Parse uploaded CSV, validate and coerce types."""
    content = await file.read()
    text = content.decode("utf-8-sig")  # handle BOM from Excel
    reader = csv.DictReader(io.StringIO(text))

    result = ParseResult()

    for row_num, raw_row in enumerate(reader, start=2):  # row 1 = header
        result.total_rows += 1
        row_errors: list[str] = []
        parsed: dict[str, Any] = {}

        for fd in field_defs:
            raw_val = (raw_row.get(fd.column) or "").strip()

            if fd.required and not raw_val:
                row_errors.append(f"'{fd.column}' is required")
                continue

            if not raw_val:
                parsed[fd.db_field] = None
                continue

            if fd.coerce:
                try:
                    parsed[fd.db_field] = fd.coerce(raw_val)
                except (ValueError, TypeError):
                    row_errors.append(f"'{fd.column}': invalid value '{raw_val}'")
                    continue
            else:
                parsed[fd.db_field] = raw_val

        if row_errors:
            result.errors.append(RowError(row=row_num, errors=row_errors))
        else:
            result.rows.append(parsed)

    return result


def generate_template_csv(
    field_defs: list[FieldDef],
    sample_row: dict[str, str] | None = None,
) -> str:
    """Generate CSV template string with headers and optional sample row."""
    output = io.StringIO()
    headers = [fd.column for fd in field_defs]
    writer = csv.writer(output)
    writer.writerow(headers)
    if sample_row:
        writer.writerow([sample_row.get(h, "") for h in headers])
    return output.getvalue()
