import itertools
from datetime import date

import pytest

from database.db_manager import DatabaseManager
from models.expense import Expense


@pytest.fixture
def make_expense():
    ids = itertools.count(1)

    def _make(amount, category="Food", date="2024-01-05", description="Lunch", created_at=""):
        return Expense(
            id=f"expense-{next(ids)}",
            date=date,
            amount=amount,
            category=category,
            description=description,
            created_at=created_at or f"{date}T12:00:00",
        )

    return _make


@pytest.fixture
def scenario(make_expense):
    """Three expenses over Jan/Feb 2024: 10 Food, 20 Food, 5 Bills."""
    return [
        make_expense(10, "Food", "2024-01-05", "Groceries"),
        make_expense(20, "Food", "2024-02-10", "Dinner out"),
        make_expense(5, "Bills", "2024-02-15", "Phone top-up"),
    ]


@pytest.fixture
def feb_2024():
    return date(2024, 2, 20)


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "expenses.db"))
    manager.initialize()
    yield manager
    manager.close()
