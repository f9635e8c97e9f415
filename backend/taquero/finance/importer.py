"""Turn a batch of uploaded CSV files into one month of ImportedData.

Each file is detected on its own. Against a month that already has data,
POS reports replace the same report and bank statements are appended. Problems are
reported per file as plain strings and never stop the other files.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from taquero.finance import csv_parsers as parsers
from taquero.finance.data import ImportedData

logger = logging.getLogger(__name__)


@dataclass
class UploadOutcome:
    data: ImportedData
    processed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def parse_uploads(files: list[tuple[str, str]]) -> UploadOutcome:
    """``files`` is a list of ``(filename, text)`` pairs."""
    data = ImportedData()
    outcome = UploadOutcome(data=data)

    for filename, text in files:
        if not filename.lower().endswith(".csv"):
            outcome.errors.append(f"{filename}: Not a CSV file")
            continue

        detected = parsers.detect_csv_type(text, filename)
        if detected is None:
            outcome.errors.append(f"{filename}: Could not detect file type")
            continue

        try:
            if detected == parsers.SALES_BY_DAY:
                data.sales_by_day = parsers.parse_sales_by_day(text)
            elif detected == parsers.SALES_BY_HOUR:
                data.sales_by_hour = parsers.parse_sales_by_hour(text)
            elif detected == parsers.SALES_BY_CATEGORY:
                data.sales_by_category = parsers.parse_sales_by_category(text)
            elif detected == parsers.SALES_BY_PRODUCT:
                data.sales_by_product = parsers.parse_sales_by_product(text)
            else:
                account = parsers.BANK_TYPES[detected]
                data.bank_transactions = data.bank_transactions + parsers.parse_bank_statement(
                    text, account=account
                )
                data.supplier_purchases = parsers.extract_supplier_purchases(
                    data.bank_transactions
                )
        except (ValueError, IndexError) as e:
            logger.warning("Failed to parse %s as %s: %s", filename, detected, e)
            outcome.errors.append(f"{filename}: Parse error")
            continue

        outcome.processed.append(detected)

    if data.sales_by_day:
        data.date_range_start = data.sales_by_day[0].date
        data.date_range_end = data.sales_by_day[-1].date
    data.last_updated = datetime.utcnow().isoformat()
    return outcome


_POS_FIELDS = {
    parsers.SALES_BY_DAY: "sales_by_day",
    parsers.SALES_BY_HOUR: "sales_by_hour",
    parsers.SALES_BY_CATEGORY: "sales_by_category",
    parsers.SALES_BY_PRODUCT: "sales_by_product",
}


def overlay(base: ImportedData, upload: UploadOutcome) -> ImportedData:
    """Apply a fresh upload onto a month that already has data."""
    for kind in upload.processed:
        name = _POS_FIELDS.get(kind)
        if name is not None:
            setattr(base, name, getattr(upload.data, name))

    if any(kind in parsers.BANK_TYPES for kind in upload.processed):
        base.bank_transactions = base.bank_transactions + upload.data.bank_transactions
        base.supplier_purchases = parsers.extract_supplier_purchases(base.bank_transactions)

    if base.sales_by_day:
        base.date_range_start = base.sales_by_day[0].date
        base.date_range_end = base.sales_by_day[-1].date
    base.last_updated = upload.data.last_updated
    return base
