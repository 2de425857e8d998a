from dataclasses import dataclass
from utils.constants import ALL_CATEGORIES


@dataclass
class ExpenseFilters:
    category: str = ALL_CATEGORIES
    start_date: str | None = None   # 'YYYY-MM-DD', inclusive
    end_date: str | None = None     # 'YYYY-MM-DD', inclusive
    search_term: str = ""

    @property
    def is_active(self) -> bool:
        return bool(
            (self.category and self.category != ALL_CATEGORIES)
            or self.start_date
            or self.end_date
            or self.search_term.strip()
        )
