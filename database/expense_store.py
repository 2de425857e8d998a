"""Persistence for the expense list.

The whole list is one value: load() returns it, save() replaces it.
add/update/delete are load-modify-save on top of that, which is only safe
with a single writer.
"""
import json
import sqlite3
from abc import ABC, abstractmethod

import structlog

from database.db_manager import DatabaseManager
from models.expense import Expense
from utils.constants import STORAGE_KEY

logger = structlog.get_logger(__name__)


class ExpenseStore(ABC):
    @abstractmethod
    def load(self) -> list[Expense]:
        """Return all stored expenses; [] if nothing is stored or it can't be read."""

    @abstractmethod
    def save(self, expenses: list[Expense]) -> None:
        """Replace the stored list."""

    def add(self, expense: Expense) -> list[Expense]:
        expenses = self.load() + [expense]
        self.save(expenses)
        return expenses

    def update(self, expense_id: str, expense: Expense) -> list[Expense]:
        expenses = [expense if e.id == expense_id else e for e in self.load()]
        self.save(expenses)
        return expenses

    def delete(self, expense_id: str) -> list[Expense]:
        expenses = [e for e in self.load() if e.id != expense_id]
        self.save(expenses)
        return expenses


class MemoryExpenseStore(ExpenseStore):
    def __init__(self, expenses: list[Expense] | None = None):
        self._expenses = list(expenses or [])

    def load(self) -> list[Expense]:
        return list(self._expenses)

    def save(self, expenses: list[Expense]) -> None:
        self._expenses = list(expenses)


class SqliteExpenseStore(ExpenseStore):
    """JSON blob under STORAGE_KEY in the kv_store table."""

    def __init__(self, db: DatabaseManager, key: str = STORAGE_KEY):
        self._db = db
        self._key = key

    def load(self) -> list[Expense]:
        try:
            raw = self._db.get_value(self._key)
        except sqlite3.Error:
            logger.exception("expense_store_read_failed", key=self._key)
            return []
        if not raw:
            return []
        try:
            rows = json.loads(raw)
            if not isinstance(rows, list):
                raise ValueError(f"expected a list, got {type(rows).__name__}")
            expenses = [Expense.from_dict(row) for row in rows]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("expense_store_corrupt", key=self._key, error=str(e))
            return []
        logger.debug("expense_store_loaded", count=len(expenses))
        return expenses

    def save(self, expenses: list[Expense]) -> None:
        payload = json.dumps([e.to_dict() for e in expenses])
        try:
            self._db.set_value(self._key, payload)
        except sqlite3.Error:
            logger.exception("expense_store_write_failed", key=self._key, count=len(expenses))
            raise
        logger.debug("expense_store_saved", count=len(expenses))
