import math
from datetime import date

from models.expense import ExpenseFormData
from utils.constants import EXPENSE_CATEGORIES, MAX_AMOUNT, MAX_DESCRIPTION_LENGTH
from utils.date_helpers import parse_date, today as _today


class ExpenseValidationError(ValueError):
    """Raised when a form fails validation. .errors maps field name → message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


def validate_expense_form(form: ExpenseFormData, today: date | None = None) -> dict[str, str]:
    """Return {field: message} for every invalid field; {} when the form is valid."""
    ref = today or _today()
    errors: dict[str, str] = {}

    date_str = (form.date or "").strip()
    if not date_str:
        errors["date"] = "Date is required"
    else:
        d = parse_date(date_str)
        if d is None:
            errors["date"] = "Invalid date"
        elif d > ref:
            errors["date"] = "Date cannot be in the future"

    amount_str = (form.amount or "").strip()
    if not amount_str:
        errors["amount"] = "Amount is required"
    else:
        try:
            amount = float(amount_str)
        except ValueError:
            amount = None
        if amount is None or math.isnan(amount):
            errors["amount"] = "Amount must be a valid number"
        elif amount <= 0:
            errors["amount"] = "Amount must be greater than zero"
        elif amount > MAX_AMOUNT:
            errors["amount"] = "Amount seems unreasonably large"

    if not form.category:
        errors["category"] = "Category is required"
    elif form.category not in EXPENSE_CATEGORIES:
        errors["category"] = f"Unknown category: {form.category}"

    description = (form.description or "").strip()
    if not description:
        errors["description"] = "Description is required"
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"

    return errors


def has_errors(errors: dict[str, str]) -> bool:
    return len(errors) > 0
