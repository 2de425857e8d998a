APP_NAME = "Expense Tracker"
APP_WIDTH = 1100
APP_HEIGHT = 760
DB_FILE = "expenses.db"
STORAGE_KEY = "expense-tracker-data"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

ALL_CATEGORIES = "All"
EXPENSE_CATEGORIES = [
    "Food",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills",
    "Other",
]
DEFAULT_CATEGORY = "Other"

CATEGORY_COLORS = {
    "Food":           "#FF9800",
    "Transportation": "#2196F3",
    "Entertainment":  "#9C27B0",
    "Shopping":       "#E91E63",
    "Bills":          "#F44336",
    "Other":          "#888888",
}

MAX_AMOUNT = 1_000_000
MAX_DESCRIPTION_LENGTH = 200
TREND_MONTHS = 6

SORT_OPTIONS = {
    "Newest First":   ("date", "desc"),
    "Oldest First":   ("date", "asc"),
    "Highest Amount": ("amount", "desc"),
    "Lowest Amount":  ("amount", "asc"),
}
