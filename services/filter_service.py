from datetime import date

from models.expense import Expense
from models.filters import ExpenseFilters
from utils.constants import ALL_CATEGORIES
from utils.currency import amount_search_text
from utils.date_helpers import parse_date

SORT_KEYS = ("date", "amount")
SORT_ORDERS = ("asc", "desc")


class InvalidDateBoundError(ValueError):
    """A start/end date filter that can't be read as a date."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field.replace('_', ' ')}: {value!r}")


def _parse_bound(field: str, value: str | None) -> date | None:
    if value is None or not value.strip():
        return None
    d = parse_date(value)
    if d is None:
        raise InvalidDateBoundError(field, value)
    return d


def _matches_search(expense: Expense, term: str) -> bool:
    return (
        term in expense.description.lower()
        or term in expense.category.lower()
        or term in amount_search_text(expense.amount)
    )


def filter_expenses(expenses: list[Expense], filters: ExpenseFilters) -> list[Expense]:
    """Return the expenses passing every active criterion, in input order.

    Raises InvalidDateBoundError if a date bound is present but unparsable.
    """
    start = _parse_bound("start_date", filters.start_date)
    end = _parse_bound("end_date", filters.end_date)
    category = filters.category if filters.category != ALL_CATEGORIES else None
    term = (filters.search_term or "").strip().lower()

    result = []
    for e in expenses:
        if category and e.category != category:
            continue
        if start or end:
            d = parse_date(e.date)
            if d is None:
                continue
            if start and d < start:
                continue
            if end and d > end:
                continue
        if term and not _matches_search(e, term):
            continue
        result.append(e)
    return result


def sort_expenses(
    expenses: list[Expense], sort_by: str = "date", order: str = "desc"
) -> list[Expense]:
    """Stable sort into a new list; equal keys keep their input order either way."""
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Invalid sort key: {sort_by}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Invalid sort order: {order}")

    descending = order == "desc"
    if sort_by == "date":
        return sorted(expenses, key=lambda e: parse_date(e.date) or date.min, reverse=descending)
    return sorted(expenses, key=lambda e: e.amount, reverse=descending)
