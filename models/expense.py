from dataclasses import dataclass, asdict
from utils.date_helpers import normalize_date


@dataclass(frozen=True)
class Expense:
    id: str
    date: str               # 'YYYY-MM-DD'
    amount: float
    category: str           # one of EXPENSE_CATEGORIES
    description: str
    created_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        """Build from a stored dict. Accepts the camelCase 'createdAt' key too."""
        return cls(
            id=str(data["id"]),
            date=normalize_date(str(data["date"])),
            amount=float(data["amount"]),
            category=str(data["category"]),
            description=str(data.get("description", "")),
            created_at=str(data.get("created_at") or data.get("createdAt") or ""),
        )


@dataclass
class ExpenseFormData:
    """Raw field values as typed into the expense form."""
    date: str
    amount: str
    category: str
    description: str

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseFormData":
        return cls(
            date=expense.date,
            amount=f"{expense.amount:.2f}",
            category=expense.category,
            description=expense.description,
        )
