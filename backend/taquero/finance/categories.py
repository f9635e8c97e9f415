"""Expense categories and the payee → category classification table."""

import csv
import io
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

REVENUE = "Revenue"
FOOD_SUPPLIES = "Food Supplies"
LABOR_PAYROLL = "Labor/Payroll"
RENT_LEASE = "Rent/Lease"
UTILITIES = "Utilities"
EQUIPMENT_RENTAL = "Equipment Rental"
INSURANCE = "Insurance"
MARKETING_TECH = "Marketing/Tech"
DELIVERY_PLATFORM_FEES = "Delivery Platform Fees"
BANKING_FEES = "Banking Fees"
LICENSES_COMPLIANCE = "Licenses/Compliance"
PROFESSIONAL_SERVICES = "Professional Services"
REPAIRS_MAINTENANCE = "Repairs/Maintenance"
SUPPLIES = "Supplies"
PARKING_TRANSPORT = "Parking/Transport"
INTERNAL_TRANSFER = "Internal Transfer"
PERSONAL = "Personal"
TAX = "Tax"
OTHER = "Other"
UNKNOWN = "Unknown"

EXPENSE_CATEGORIES = (
    REVENUE,
    FOOD_SUPPLIES,
    LABOR_PAYROLL,
    RENT_LEASE,
    UTILITIES,
    EQUIPMENT_RENTAL,
    INSURANCE,
    MARKETING_TECH,
    DELIVERY_PLATFORM_FEES,
    BANKING_FEES,
    LICENSES_COMPLIANCE,
    PROFESSIONAL_SERVICES,
    REPAIRS_MAINTENANCE,
    SUPPLIES,
    PARKING_TRANSPORT,
    INTERNAL_TRANSFER,
    PERSONAL,
    TAX,
    OTHER,
    UNKNOWN,
)

# Money that leaves the account without being a business cost
EXCLUDED_CATEGORIES = frozenset({PERSONAL, INTERNAL_TRANSFER})

# Food + supplies + labour + rent + compliance ("operational costs")
PRIME_COST_CATEGORIES = frozenset({
    FOOD_SUPPLIES,
    SUPPLIES,
    LABOR_PAYROLL,
    RENT_LEASE,
    LICENSES_COMPLIANCE,
})


@dataclass
class Classification:
    payee: str
    category: str
    user_correction: str | None = None
    confidence: str | None = None

    @property
    def effective_category(self) -> str:
        return self.user_correction or self.category


def is_business_expense(category: str | None) -> bool:
    return (category or OTHER) not in EXCLUDED_CATEGORIES


def is_excluded_category(category: str | None) -> bool:
    return category in EXCLUDED_CATEGORIES


def is_revenue_category(category: str | None) -> bool:
    return category == REVENUE


def parse_classifications_csv(text: str) -> list[Classification]:
    """Parse ``payee,category,user_correction,confidence`` rows.

    Rows without a payee or category are skipped; the header row is
    always the first line.
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff").strip()))
    rows = list(reader)
    result = []
    for row in rows[1:]:
        cells = [c.strip() for c in row] + [""] * (4 - len(row))
        payee, category, correction, confidence = cells[:4]
        if not payee or not category:
            continue
        result.append(Classification(
            payee=payee,
            category=category,
            user_correction=correction or None,
            confidence=confidence or None,
        ))
    logger.info("Parsed %d payee classifications", len(result))
    return result


def category_for(payee: str, table: dict[str, Classification]) -> str | None:
    """Category for an exact payee match; user corrections win."""
    entry = table.get(payee)
    if entry is None:
        return None
    return entry.effective_category
