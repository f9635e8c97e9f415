"""Dashboard metrics and the 0-10 business health score.

The health score only looks at bank data: all income is revenue, and
business expenses leave out Personal and Internal Transfer.

Profit gate
    losing money caps the score at 5, stepped by how much was lost:
    >20% → 0, >15% → 1, >10% → 2, >5% → 3, >2% → 4, else 5

Profitable
    6 (pass) plus bonuses from three breakpoint tables, capped at 10:
    profit margin up to +2.5, operational costs up to +1.0,
    daily revenue up to +0.5 (weights 63 / 25 / 12)
"""

import math
from dataclasses import asdict, dataclass, field
from datetime import date

from taquero.finance.categories import (
    OTHER,
    PRIME_COST_CATEGORIES,
    Classification,
    category_for,
    is_business_expense,
)
from taquero.finance.data import BankTransaction, ImportedData
from taquero.finance.dates import parse_finance_date

STATUS_BY_SCORE = (
    "Critical",       # 0
    "Critical",       # 1
    "Severe",         # 2
    "Bad",            # 3
    "Poor",           # 4
    "Barely Failed",  # 5
    "Pass",           # 6
    "Satisfactory",   # 7
    "Good",           # 8
    "Great",          # 9
    "Excellent",      # 10
)

# (threshold, score) pairs, first match wins
LOSS_GATE = ((0.20, 0), (0.15, 1), (0.10, 2), (0.05, 3), (0.02, 4))
MARGIN_BONUS = ((15, 2.5), (10, 2.0), (7, 1.5), (5, 1.0), (2, 0.5))
OP_COST_BONUS = ((65, 1.0), (70, 0.7), (75, 0.4), (80, 0.2))
DAILY_REVENUE_BONUS = (
    (4000, 0.5), (3500, 0.45), (3000, 0.4), (2500, 0.3), (2000, 0.2), (1500, 0.1),
)
DAILY_REVENUE_SCORE = (
    (4000, 10), (3500, 9), (3000, 8), (2500, 7), (2000, 6),
    (1500, 5), (1000, 4), (600, 3), (300, 2),
)

MARGIN_WEIGHT = 63
OP_COST_WEIGHT = 25
REVENUE_WEIGHT = 12

POS_PAYEES = ("HOT LIKE A MEXICAN", "MEXICAN QBT")


@dataclass
class ScoreComponent:
    metric: str
    score: float
    weight: int
    actual_value: str
    bonus_points: float | None = None


@dataclass
class HealthScore:
    score: float
    status: str
    insights: list[str] = field(default_factory=list)
    breakdown: list[ScoreComponent] = field(default_factory=list)


def _at_least(value: float, table) -> float:
    for threshold, points in table:
        if value >= threshold:
            return points
    return 0


def _at_most(value: float, table) -> float:
    for threshold, points in table:
        if value <= threshold:
            return points
    return 0


def status_for(score: float) -> str:
    return STATUS_BY_SCORE[max(0, min(10, math.floor(score + 0.5)))]


def _money(value: float) -> str:
    return f"${value:,.0f}"


def calculate_health_score(
    net_cash_flow: float,
    total_revenue: float,
    daily_revenue: float,
    prime_cost: float,
) -> HealthScore:
    if total_revenue <= 0:
        return HealthScore(score=0, status="No Data", insights=["No revenue data"])

    profit_margin = net_cash_flow / total_revenue * 100
    prime_cost_percent = prime_cost / total_revenue * 100

    if net_cash_flow < 0:
        loss_ratio = abs(net_cash_flow) / total_revenue
        score = 5
        for threshold, gate_score in LOSS_GATE:
            if loss_ratio > threshold:
                score = gate_score
                break

        insights = [
            f"Lost {loss_ratio * 100:.1f}% of revenue",
            f"Net loss: -{_money(abs(net_cash_flow))}",
        ]
        if prime_cost_percent > 80:
            insights.append(f"High operational costs ({prime_cost_percent:.1f}%)")

        op_score = 8 if prime_cost_percent <= 70 else 5 if prime_cost_percent <= 80 else 2
        rev_score = 8 if daily_revenue >= 3000 else 6 if daily_revenue >= 2000 else 4
        return HealthScore(
            score=score,
            status=STATUS_BY_SCORE[score],
            insights=insights[:3],
            breakdown=[
                ScoreComponent("Profit/Loss", score, 100,
                               f"-{loss_ratio * 100:.1f}% (lost money)"),
                ScoreComponent("Operational Costs", op_score, 0,
                               f"{prime_cost_percent:.1f}%"),
                ScoreComponent("Daily Revenue", rev_score, 0,
                               f"{_money(daily_revenue)}/day"),
            ],
        )

    margin_bonus = _at_least(profit_margin, MARGIN_BONUS)
    op_cost_bonus = _at_most(prime_cost_percent, OP_COST_BONUS)
    revenue_bonus = _at_least(daily_revenue, DAILY_REVENUE_BONUS)

    raw = 6 + margin_bonus + op_cost_bonus + revenue_bonus
    score = min(10.0, math.floor(raw * 10 + 0.5) / 10)

    insights = []
    if profit_margin >= 10:
        insights.append(f"Strong profit margin ({profit_margin:.1f}%)")
    elif profit_margin >= 5:
        insights.append(f"Healthy profit margin ({profit_margin:.1f}%)")
    else:
        insights.append(f"Thin profit margin ({profit_margin:.1f}%)")

    if prime_cost_percent <= 70:
        insights.append(f"Efficient operations ({prime_cost_percent:.1f}% op costs)")
    elif prime_cost_percent <= 80:
        insights.append(f"Operational costs could improve ({prime_cost_percent:.1f}%)")
    else:
        insights.append(f"High operational costs ({prime_cost_percent:.1f}%)")

    if daily_revenue >= 3500:
        insights.append(f"Strong daily revenue ({_money(daily_revenue)}/day)")
    elif daily_revenue >= 2500:
        insights.append(f"Solid daily revenue ({_money(daily_revenue)}/day)")
    elif daily_revenue >= 2000:
        insights.append(f"Moderate daily revenue ({_money(daily_revenue)}/day)")
    elif daily_revenue >= 1500:
        insights.append(f"Below average revenue ({_money(daily_revenue)}/day)")
    else:
        insights.append(f"Low daily revenue ({_money(daily_revenue)}/day)")

    margin_score = min(10.0, 6 + margin_bonus * (4 / 2.5))
    op_cost_score = min(10.0, 6 + op_cost_bonus * 4) if op_cost_bonus > 0 else 5
    if daily_revenue <= 0:
        revenue_score = 0
    else:
        revenue_score = _at_least(daily_revenue, DAILY_REVENUE_SCORE) or 1

    return HealthScore(
        score=score,
        status=status_for(score),
        insights=insights[:3],
        breakdown=[
            ScoreComponent("Profit Margin", margin_score, MARGIN_WEIGHT,
                           f"+{profit_margin:.1f}%", margin_bonus),
            ScoreComponent("Operational Costs", op_cost_score, OP_COST_WEIGHT,
                           f"{prime_cost_percent:.1f}%", op_cost_bonus),
            ScoreComponent("Daily Revenue", revenue_score, REVENUE_WEIGHT,
                           f"{_money(daily_revenue)}/day", revenue_bonus),
        ],
    )


def classify_transactions(
    transactions: list[BankTransaction],
    table: dict[str, Classification],
) -> list[BankTransaction]:
    """Attach a category to every transaction; unknown payees become Other."""
    for tx in transactions:
        tx.category = category_for(tx.payee, table) or OTHER
    return transactions


def bank_days_in_period(transactions: list[BankTransaction], year: int | None = None) -> int:
    dates = [d for d in (parse_finance_date(t.date, year) for t in transactions) if d]
    if not dates:
        return 1
    return max(1, (max(dates) - min(dates)).days + 1)


def _sum(values) -> float:
    return math.fsum(values)


def calculate_metrics(
    data: ImportedData,
    table: dict[str, Classification],
    year: int | None = None,
) -> dict:
    txs = classify_transactions(data.bank_transactions, table)
    income = [t for t in txs if t.type == "income"]
    expenses = [t for t in txs if t.type == "expense"]
    business = [t for t in expenses if is_business_expense(t.category)]

    gross_sales = _sum(d.total for d in data.sales_by_day)
    total_orders = sum(d.orders for d in data.sales_by_day)
    total_income = _sum(t.amount for t in income)
    total_expenses = _sum(t.amount for t in expenses)
    business_expenses = _sum(t.amount for t in business)
    prime_cost = _sum(t.amount for t in business if t.category in PRIME_COST_CATEGORIES)

    def income_from(*needles: str) -> float:
        return _sum(
            t.amount for t in income
            if any(n in t.payee.upper() for n in needles)
        )

    by_category: dict[str, float] = {}
    for t in business:
        by_category[t.category or OTHER] = by_category.get(t.category or OTHER, 0.0) + t.amount
    expenses_by_category = sorted(
        (
            {
                "category": category,
                "amount": amount,
                "percentage": amount / business_expenses * 100 if business_expenses > 0 else 0.0,
            }
            for category, amount in by_category.items()
        ),
        key=lambda row: row["amount"],
        reverse=True,
    )

    top_expenses = [
        {"payee": t.payee, "category": t.category or OTHER, "amount": t.amount}
        for t in sorted(business, key=lambda t: t.amount, reverse=True)[:10]
    ]

    top_products = [
        {
            "product": p.product,
            "quantity": p.quantity,
            "revenue": p.total,
            "percent_of_sales": p.percent_of_sale,
        }
        for p in sorted(data.sales_by_product, key=lambda p: p.total, reverse=True)[:20]
    ]
    top_categories = [
        {
            "category": c.category,
            "quantity": c.quantity,
            "revenue": c.total,
            "percent_of_sales": c.percent_of_sale,
        }
        for c in sorted(data.sales_by_category, key=lambda c: c.total, reverse=True)
    ]
    peak_hours = [
        {"hour": h.time, "orders": h.orders, "revenue": h.total}
        for h in sorted(
            (h for h in data.sales_by_hour if h.orders > 0),
            key=lambda h: h.total,
            reverse=True,
        )[:10]
    ]

    orders_per_day = []
    for i, day in enumerate(data.sales_by_day):
        window = data.sales_by_day[max(0, i - 6): i + 1]
        orders_per_day.append({
            "date": day.date,
            "orders": day.orders,
            "moving_average": round(sum(d.orders for d in window) / len(window), 1),
        })

    average_order_value = gross_sales / total_orders if total_orders > 0 else 0.0
    daily_revenue = total_income / bank_days_in_period(txs, year)
    pos_days = len(data.sales_by_day) or 1

    health = calculate_health_score(
        net_cash_flow=total_income - business_expenses,
        total_revenue=total_income,
        daily_revenue=daily_revenue,
        prime_cost=prime_cost,
    )

    return {
        "gross_sales": gross_sales,
        "total_orders": total_orders,
        "average_order_value": average_order_value,
        "pos_revenue": income_from(*POS_PAYEES),
        "uber_revenue": income_from("UBER"),
        "delivereasy_revenue": income_from("DELIVEREASY"),
        "total_income": total_income,
        "total_expenses": total_expenses,
        "business_expenses": business_expenses,
        "excluded_expenses": total_expenses - business_expenses,
        "prime_cost": prime_cost,
        "net_cash_flow": total_income - total_expenses,
        "business_net_cash_flow": total_income - business_expenses,
        "expenses_by_category": expenses_by_category,
        "top_expenses": top_expenses,
        "top_products": top_products,
        "top_categories": top_categories,
        "peak_hours": peak_hours,
        "orders_per_day": orders_per_day,
        "daily_averages": {
            "daily_revenue": daily_revenue,
            "daily_orders": total_orders / pos_days,
            "avg_order_value": average_order_value,
        },
        "health_score": asdict(health),
    }


def date_range_summary(
    data: ImportedData,
    start: date | None,
    end: date | None,
) -> dict:
    total_days = len(data.sales_by_day)
    total_revenue = _sum(d.total for d in data.sales_by_day)
    total_orders = sum(d.orders for d in data.sales_by_day)

    if start and end:
        label = f"{start.isoformat()} - {end.isoformat()}"
    elif start:
        label = f"From {start.isoformat()}"
    elif end:
        label = f"Until {end.isoformat()}"
    else:
        label = "All Time"

    return {
        "date_range": label,
        "total_days": total_days,
        "total_revenue": total_revenue,
        "average_daily_revenue": total_revenue / total_days if total_days else 0.0,
        "total_orders": total_orders,
        "average_daily_orders": total_orders / total_days if total_days else 0.0,
    }
