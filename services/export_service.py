import csv
import io
from datetime import date

import structlog

from models.expense import Expense
from utils.date_helpers import format_date, today as _today

logger = structlog.get_logger(__name__)

CSV_HEADER = ["Date", "Amount", "Category", "Description"]


def build_rows(expenses: list[Expense]) -> list[list[str]]:
    """Return raw cell values for csv.writer, header first."""
    rows = [list(CSV_HEADER)]
    for e in expenses:
        rows.append([e.date, f"{e.amount:.2f}", e.category, e.description])
    return rows


def _write_rows(f, expenses: list[Expense]):
    # every cell quoted, so descriptions are always quoted with "" escapes
    writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(build_rows(expenses))


def build_csv(expenses: list[Expense]) -> str:
    """CSV text, one line per expense. Raises ValueError when empty."""
    if not expenses:
        raise ValueError("No expenses to export.")
    buf = io.StringIO()
    _write_rows(buf, expenses)
    return buf.getvalue()


def default_filename(today: date | None = None) -> str:
    return f"expenses-{format_date(today or _today())}.csv"


def export_csv(expenses: list[Expense], path: str) -> int:
    """Write the CSV to path; returns the number of expenses written."""
    if not expenses:
        raise ValueError("No expenses to export.")
    with open(path, "w", newline="", encoding="utf-8") as f:
        _write_rows(f, expenses)
    logger.info("expenses_exported", path=path, count=len(expenses))
    return len(expenses)
