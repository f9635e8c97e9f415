"""Row types produced by the POS and bank CSV parsers.

Everything is kept JSON-friendly so a month of imported data can be
stored as a single JSON document and rebuilt with ``from_dict``.
"""

from dataclasses import asdict, dataclass, field, fields


@dataclass
class SalesByProduct:
    product: str
    quantity: int = 0
    tax: float = 0.0
    total: float = 0.0
    percent_of_sale: float = 0.0


@dataclass
class SalesByCategory:
    category: str
    quantity: int = 0
    tax: float = 0.0
    total: float = 0.0
    percent_of_sale: float = 0.0


@dataclass
class SalesByHour:
    time: str
    orders: int = 0
    cash: float = 0.0
    eftpos: float = 0.0
    online: float = 0.0
    on_account: float = 0.0
    uber_eats: float = 0.0
    menulog: float = 0.0
    doordash: float = 0.0
    delivereasy: float = 0.0
    eftpos_surcharge: float = 0.0
    tax: float = 0.0
    total: float = 0.0


@dataclass
class SalesByDay:
    date: str
    orders: int = 0
    cash: float = 0.0
    eftpos: float = 0.0
    online: float = 0.0
    on_account: float = 0.0
    uber_eats: float = 0.0
    menulog: float = 0.0
    doordash: float = 0.0
    delivereasy: float = 0.0
    eftpos_surcharge: float = 0.0
    discounts: float = 0.0
    refunds: float = 0.0
    tax: float = 0.0
    total: float = 0.0


@dataclass
class BankTransaction:
    date: str
    # Always positive; ``type`` carries the sign
    amount: float
    payee: str
    type: str  # income | expense
    # restaurant | caravan | ecommerce
    account: str = "restaurant"
    category: str | None = None


@dataclass
class SupplierPurchase:
    date: str
    supplier: str
    amount: float


_ROW_TYPES = {
    "sales_by_day": SalesByDay,
    "sales_by_hour": SalesByHour,
    "sales_by_category": SalesByCategory,
    "sales_by_product": SalesByProduct,
    "bank_transactions": BankTransaction,
    "supplier_purchases": SupplierPurchase,
}


@dataclass
class ImportedData:
    sales_by_day: list[SalesByDay] = field(default_factory=list)
    sales_by_hour: list[SalesByHour] = field(default_factory=list)
    sales_by_category: list[SalesByCategory] = field(default_factory=list)
    sales_by_product: list[SalesByProduct] = field(default_factory=list)
    bank_transactions: list[BankTransaction] = field(default_factory=list)
    supplier_purchases: list[SupplierPurchase] = field(default_factory=list)
    last_updated: str | None = None
    date_range_start: str | None = None
    date_range_end: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict | None) -> "ImportedData":
        raw = raw or {}
        kwargs = {}
        for f in fields(cls):
            value = raw.get(f.name)
            row_type = _ROW_TYPES.get(f.name)
            if row_type is not None:
                known = {rf.name for rf in fields(row_type)}
                kwargs[f.name] = [
                    row_type(**{k: v for k, v in row.items() if k in known})
                    for row in value or []
                ]
            else:
                kwargs[f.name] = value
        return cls(**kwargs)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in _ROW_TYPES)
