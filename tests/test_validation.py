from datetime import date

import pytest

from models.expense import ExpenseFormData
from services.validation import has_errors, validate_expense_form

TODAY = date(2024, 3, 1)


def form(**overrides):
    values = {"date": "2024-02-10", "amount": "12.50", "category": "Food", "description": "Lunch"}
    values.update(overrides)
    return ExpenseFormData(**values)


def test_valid_form_has_no_errors():
    errors = validate_expense_form(form(), TODAY)
    assert errors == {}
    assert not has_errors(errors)


def test_empty_form_reports_every_field():
    errors = validate_expense_form(ExpenseFormData("", "", "", ""), TODAY)
    assert errors == {
        "date": "Date is required",
        "amount": "Amount is required",
        "category": "Category is required",
        "description": "Description is required",
    }
    assert has_errors(errors)


def test_date_rules():
    assert validate_expense_form(form(date="2024-03-02"), TODAY)["date"] == "Date cannot be in the future"
    assert validate_expense_form(form(date="not a date"), TODAY)["date"] == "Invalid date"
    assert "date" not in validate_expense_form(form(date="2024-03-01"), TODAY)


@pytest.mark.parametrize("amount, message", [
    ("abc", "Amount must be a valid number"),
    ("nan", "Amount must be a valid number"),
    ("0", "Amount must be greater than zero"),
    ("-4", "Amount must be greater than zero"),
    ("1000000.01", "Amount seems unreasonably large"),
])
def test_amount_rules(amount, message):
    assert validate_expense_form(form(amount=amount), TODAY)["amount"] == message


def test_amount_upper_limit_is_inclusive():
    assert "amount" not in validate_expense_form(form(amount="1000000"), TODAY)


def test_unknown_category():
    assert "category" in validate_expense_form(form(category="Travel"), TODAY)


def test_description_rules():
    assert validate_expense_form(form(description="   "), TODAY)["description"] == "Description is required"
    assert "description" in validate_expense_form(form(description="x" * 201), TODAY)
    assert "description" not in validate_expense_form(form(description="x" * 200), TODAY)
    assert "description" not in validate_expense_form(form(description="  " + "x" * 200 + "  "), TODAY)
