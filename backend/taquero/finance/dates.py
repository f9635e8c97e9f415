"""Date parsing for POS and bank exports.

Accepted shapes:
    "Thu, 04 Dec"   POS daily report (no year; caller supplies one)
    "01/11/25"      bank statement DD/MM/YY (20YY)
    "01/11/2025"    DD/MM/YYYY
    "2025-11-01"    ISO
"""

from datetime import date

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def parse_finance_date(value: str | None, year: int | None = None) -> date | None:
    if not value:
        return None
    value = value.strip()
    try:
        if "," in value:
            parts = value.split(",", 1)[1].split()
            if len(parts) >= 2:
                month = _MONTHS.get(parts[1][:3].lower())
                if month:
                    return date(year or date.today().year, month, int(parts[0]))
            return None

        if "/" in value:
            day, month, yr = value.split("/")
            full_year = int(yr)
            if len(yr) <= 2:
                full_year += 2000
            return date(full_year, int(month), int(day))

        if "-" in value:
            return date.fromisoformat(value[:10])
    except ValueError:
        return None
    return None


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"
