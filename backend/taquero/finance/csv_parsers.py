"""Parsers for the POS (Tabin) report exports and bank statement CSVs.

Files are column-position dependent. The header row is only used to
detect which report a file is; see ``detect_csv_type``.
"""

import csv
import io
import re

from taquero.finance.data import (
    BankTransaction,
    SalesByCategory,
    SalesByDay,
    SalesByHour,
    SalesByProduct,
    SupplierPurchase,
)

SALES_BY_DAY = "sales_by_day"
SALES_BY_HOUR = "sales_by_hour"
SALES_BY_CATEGORY = "sales_by_category"
SALES_BY_PRODUCT = "sales_by_product"
BANK_RESTAURANT = "bank_restaurant"
BANK_CARAVAN = "bank_caravan"
BANK_ECOMMERCE = "bank_ecommerce"

BANK_TYPES = {
    BANK_RESTAURANT: "restaurant",
    BANK_CARAVAN: "caravan",
    BANK_ECOMMERCE: "ecommerce",
}

SUPPLIER_KEYWORDS = (
    "GILMOURS",
    "DAVIS TRADING",
    "MEXI-CAN",
    "MONUMENT",
    "FOODSTUFFS",
)

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def parse_currency(value: str | None) -> float:
    """``"-$1,234.56"`` → -1234.56; blanks and junk become 0."""
    if not value:
        return 0.0
    cleaned = value.replace("$", "").replace(",", "").strip()
    match = _NUMBER_RE.match(cleaned)
    return float(match.group()) if match else 0.0


def parse_percentage(value: str | None) -> float:
    if not value:
        return 0.0
    return parse_currency(value.replace("%", ""))


def parse_int(value: str | None) -> int:
    if not value:
        return 0
    match = _NUMBER_RE.match(value.replace(",", "").strip())
    return int(float(match.group())) if match else 0


def split_rows(text: str) -> list[list[str]]:
    """Split CSV text into trimmed cells.

    Tab-delimited when the header line contains a tab, comma otherwise.
    Quoted fields may contain the delimiter.
    """
    text = text.lstrip("\ufeff").strip()
    if not text:
        return []
    first_line = text.splitlines()[0]
    delimiter = "\t" if "\t" in first_line else ","
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    return [[cell.strip() for cell in row] for row in reader]


def _cells(row: list[str], count: int) -> list[str]:
    return (row + [""] * count)[:count]


def detect_csv_type(text: str, filename: str = "") -> str | None:
    """Classify a file by substrings of its header line, in any order."""
    text = text.lstrip("\ufeff").strip()
    if not text:
        return None
    header = text.splitlines()[0].lower()
    name = filename.lower()

    def has(*parts: str) -> bool:
        return all(p in header for p in parts)

    if has("date", "orders", "discounts"):
        return SALES_BY_DAY
    if has("time", "orders", "eftpos surcharge"):
        return SALES_BY_HOUR
    if has("category", "quantity", "% of sale"):
        return SALES_BY_CATEGORY
    if has("product", "quantity", "% of sale"):
        return SALES_BY_PRODUCT
    if has("date", "amount", "payee"):
        if "hot-mexican" in name or "hot mexican" in name:
            return BANK_RESTAURANT
        if "mexi-can" in name or "mexi can" in name:
            return BANK_CARAVAN
        if "ecommerce" in name or "e-commerce" in name:
            return BANK_ECOMMERCE
        return BANK_RESTAURANT
    return None


def parse_sales_by_product(text: str) -> list[SalesByProduct]:
    data = []
    for row in split_rows(text)[1:]:
        product, quantity, tax, total, percent = _cells(row, 5)
        if not product:
            continue
        data.append(SalesByProduct(
            product=product,
            quantity=parse_int(quantity),
            tax=parse_currency(tax),
            total=parse_currency(total),
            percent_of_sale=parse_percentage(percent),
        ))
    return data


def parse_sales_by_category(text: str) -> list[SalesByCategory]:
    data = []
    for row in split_rows(text)[1:]:
        category, quantity, tax, total, percent = _cells(row, 5)
        if not category:
            continue
        data.append(SalesByCategory(
            category=category,
            quantity=parse_int(quantity),
            tax=parse_currency(tax),
            total=parse_currency(total),
            percent_of_sale=parse_percentage(percent),
        ))
    return data


_CHANNELS = (
    "cash", "eftpos", "online", "on_account", "uber_eats",
    "menulog", "doordash", "delivereasy", "eftpos_surcharge",
)


def parse_sales_by_hour(text: str) -> list[SalesByHour]:
    data = []
    for row in split_rows(text)[1:]:
        cells = _cells(row, 13)
        if not cells[0]:
            continue
        money = dict(zip(_CHANNELS, (parse_currency(c) for c in cells[2:11])))
        data.append(SalesByHour(
            time=cells[0],
            orders=parse_int(cells[1]),
            tax=parse_currency(cells[11]),
            total=parse_currency(cells[12]),
            **money,
        ))
    return data


def parse_sales_by_day(text: str) -> list[SalesByDay]:
    data = []
    for row in split_rows(text)[1:]:
        cells = _cells(row, 15)
        if not cells[0]:
            continue
        money = dict(zip(_CHANNELS, (parse_currency(c) for c in cells[2:11])))
        data.append(SalesByDay(
            date=cells[0],
            orders=parse_int(cells[1]),
            discounts=parse_currency(cells[11]),
            refunds=parse_currency(cells[12]),
            tax=parse_currency(cells[13]),
            total=parse_currency(cells[14]),
            **money,
        ))
    return data


def parse_bank_statement(text: str, account: str = "restaurant") -> list[BankTransaction]:
    """Rows are ``Date,Amount,Payee``; the sign of Amount decides the type."""
    data = []
    for row in split_rows(text)[1:]:
        date, amount, payee = _cells(row, 3)
        if not date or not amount or not payee:
            continue
        value = parse_currency(amount)
        data.append(BankTransaction(
            date=date,
            amount=abs(value),
            payee=payee,
            type="income" if value >= 0 else "expense",
            account=account,
        ))
    return data


def extract_supplier_purchases(
    transactions: list[BankTransaction],
) -> list[SupplierPurchase]:
    purchases = []
    for tx in transactions:
        if tx.type != "expense":
            continue
        payee = tx.payee.upper()
        if any(keyword in payee for keyword in SUPPLIER_KEYWORDS):
            purchases.append(SupplierPurchase(
                date=tx.date, supplier=tx.payee, amount=tx.amount,
            ))
    return purchases


def validate_csv_format(
    text: str,
    expected_headers: list[str],
) -> tuple[bool, str | None]:
    if not text or not text.strip():
        return False, "File is empty"

    rows = split_rows(text)
    if len(rows) < 2:
        return False, "File must have at least a header and one data row"

    headers = [h.lower() for h in rows[0]]
    missing = [
        expected for expected in expected_headers
        if not any(expected.lower() in h for h in headers)
    ]
    if missing:
        return False, f"Missing required headers: {', '.join(missing)}"

    return True, None
