from dataclasses import dataclass, field


@dataclass
class CategoryShare:
    category: str
    amount: float
    percentage: float   # 0..100


@dataclass
class ExpenseSummary:
    total_spending: float = 0.0
    monthly_spending: float = 0.0
    average_expense: float = 0.0
    expense_count: int = 0
    category_breakdown: list[CategoryShare] = field(default_factory=list)


@dataclass
class MonthlyTotal:
    month: str          # 'YYYY-MM'
    label: str          # 'Feb 2024'
    amount: float = 0.0
    count: int = 0
