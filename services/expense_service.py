import uuid
from dataclasses import replace
from datetime import date

import structlog

from database.expense_store import ExpenseStore
from models.expense import Expense, ExpenseFormData
from services.validation import ExpenseValidationError, validate_expense_form
from utils.date_helpers import now_iso, parse_date, format_date

logger = structlog.get_logger(__name__)


def new_expense_id() -> str:
    return f"expense-{uuid.uuid4().hex}"


class ExpenseService:
    def __init__(self, store: ExpenseStore):
        self._store = store

    def get_all(self) -> list[Expense]:
        return self._store.load()

    def get_by_id(self, expense_id: str) -> Expense | None:
        return next((e for e in self._store.load() if e.id == expense_id), None)

    def create(self, form: ExpenseFormData, today: date | None = None) -> Expense:
        self._validate(form, today)
        expense = Expense(
            id=new_expense_id(),
            created_at=now_iso(),
            **self._fields(form),
        )
        self._store.add(expense)
        logger.info("expense_created", expense_id=expense.id, amount=expense.amount,
                    category=expense.category)
        return expense

    def update(self, expense_id: str, form: ExpenseFormData, today: date | None = None) -> Expense:
        self._validate(form, today)
        existing = self.get_by_id(expense_id)
        if existing is None:
            raise ValueError(f"Expense {expense_id} does not exist.")
        updated = replace(existing, **self._fields(form))
        self._store.update(expense_id, updated)
        logger.info("expense_updated", expense_id=expense_id)
        return updated

    def delete(self, expense_id: str) -> list[Expense]:
        remaining = self._store.delete(expense_id)
        logger.info("expense_deleted", expense_id=expense_id, remaining=len(remaining))
        return remaining

    def _validate(self, form: ExpenseFormData, today: date | None):
        errors = validate_expense_form(form, today)
        if errors:
            logger.debug("expense_rejected", fields=sorted(errors))
            raise ExpenseValidationError(errors)

    @staticmethod
    def _fields(form: ExpenseFormData) -> dict:
        return {
            "date": format_date(parse_date(form.date)),
            "amount": float(form.amount),
            "category": form.category,
            "description": form.description.strip(),
        }
