from datetime import date

from models.expense import Expense
from models.summary import CategoryShare, ExpenseSummary, MonthlyTotal
from utils.constants import EXPENSE_CATEGORIES, TREND_MONTHS
from utils.date_helpers import is_same_month, month_key, short_month, today as _today


def calculate_summary(expenses: list[Expense], today: date | None = None) -> ExpenseSummary:
    """Totals, this-month spending, average and per-category breakdown.

    "This month" is the year/month of `today` (local date when omitted).
    Breakdown omits zero-total categories and is sorted by amount, highest
    first; equal amounts keep EXPENSE_CATEGORIES order.
    """
    ref = today or _today()
    count = len(expenses)
    total = sum(e.amount for e in expenses)
    monthly = sum(e.amount for e in expenses if is_same_month(e.date, ref))

    category_totals = {c: 0.0 for c in EXPENSE_CATEGORIES}
    for e in expenses:
        # categories outside the fixed list still count toward the total
        category_totals[e.category] = category_totals.get(e.category, 0.0) + e.amount

    breakdown = [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=(amount / total * 100) if total > 0 else 0.0,
        )
        for category, amount in category_totals.items()
        if amount != 0
    ]
    breakdown.sort(key=lambda s: s.amount, reverse=True)

    return ExpenseSummary(
        total_spending=total,
        monthly_spending=monthly,
        average_expense=total / count if count else 0.0,
        expense_count=count,
        category_breakdown=breakdown,
    )


def monthly_trend(expenses: list[Expense], months: int = TREND_MONTHS) -> list[MonthlyTotal]:
    """Per-month totals for the most recent `months` months that have expenses, oldest first."""
    buckets: dict[str, MonthlyTotal] = {}
    for e in expenses:
        key = month_key(e.date)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthlyTotal(month=key, label=short_month(key))
        bucket.amount += e.amount
        bucket.count += 1

    ordered = [buckets[k] for k in sorted(buckets)]
    if months <= 0:
        return []
    return ordered[-months:]
