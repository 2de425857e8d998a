import customtkinter as ctk
from models.expense import Expense
from models.filters import ExpenseFilters
from services.expense_service import ExpenseService
from services.filter_service import InvalidDateBoundError, filter_expenses, sort_expenses
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.date_picker import DatePickerWidget
from ui.components.expense_form import ExpenseForm
from utils.constants import ALL_CATEGORIES, CATEGORY_COLORS, EXPENSE_CATEGORIES, SORT_OPTIONS
from utils.currency import format_currency
from utils.date_helpers import format_display_date


_MAX_RENDERED_ROWS = 100
_DEFAULT_SORT = "Newest First"


class ExpensesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        get_expenses,     # callable → list[Expense]
        notify_refresh,   # callable
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = expense_service
        self._get_expenses = get_expenses
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol

        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())
        self._category_var = ctk.StringVar(value=ALL_CATEGORIES)
        self._sort_var = ctk.StringVar(value=_DEFAULT_SORT)
        self._count_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_status_row()
        self._build_header()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search…", width=170,
        ).grid(row=0, column=0, padx=(8, 4), pady=6)

        ctk.CTkComboBox(
            bar, values=[ALL_CATEGORIES] + EXPENSE_CATEGORIES,
            variable=self._category_var, width=140, state="readonly",
            command=lambda _: self._load(),
        ).grid(row=0, column=1, padx=4)

        ctk.CTkLabel(bar, text="From").grid(row=0, column=2, padx=(8, 2))
        self._start_picker = DatePickerWidget(
            bar, date_format=self._date_format, on_change=self._load, clearable=True,
        )
        self._start_picker.grid(row=0, column=3, padx=2)

        ctk.CTkLabel(bar, text="To").grid(row=0, column=4, padx=(8, 2))
        self._end_picker = DatePickerWidget(
            bar, date_format=self._date_format, on_change=self._load, clearable=True,
        )
        self._end_picker.grid(row=0, column=5, padx=2)

        ctk.CTkOptionMenu(
            bar, values=list(SORT_OPTIONS), variable=self._sort_var,
            width=140, command=lambda _: self._load(),
        ).grid(row=0, column=6, padx=8)

        self._clear_btn = ctk.CTkButton(
            bar, text="Clear Filters", width=96,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._clear_filters,
        )
        self._clear_btn.grid(row=0, column=7, padx=4)

        ctk.CTkButton(
            bar, text="+ Expense", width=96, command=self._open_add_form,
        ).grid(row=0, column=8, padx=(4, 8))

    def _build_status_row(self):
        ctk.CTkLabel(
            self, textvariable=self._count_var, text_color="gray60", anchor="w",
        ).grid(row=1, column=0, sticky="ew", padx=16, pady=(4, 0))

    def _filters(self) -> ExpenseFilters:
        return ExpenseFilters(
            category=self._category_var.get(),
            start_date=self._start_picker.get() or None,
            end_date=self._end_picker.get() or None,
            search_term=self._search_var.get(),
        )

    def _clear_filters(self):
        self._search_var.set("")
        self._category_var.set(ALL_CATEGORIES)
        self._start_picker.set("")
        self._end_picker.set("")
        self._sort_var.set(_DEFAULT_SORT)
        self._load()

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("Date", 90), ("Category", 120), ("Description", 320),
                ("Amount", 100), ("Actions", 100)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    # ── Scrollable list ──────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        expenses = self._get_expenses()
        filters = self._filters()
        sort_by, order = SORT_OPTIONS.get(self._sort_var.get(), SORT_OPTIONS[_DEFAULT_SORT])
        self._clear_btn.configure(state="normal" if filters.is_active else "disabled")

        try:
            rows = sort_expenses(filter_expenses(expenses, filters), sort_by, order)
        except InvalidDateBoundError as e:
            self._count_var.set("")
            ctk.CTkLabel(
                self._scroll, text=f"{e}. Use a date like {format_display_date('2024-01-31', self._date_format)}.",
                text_color="#F44336",
            ).grid(row=0, column=0, pady=20)
            return

        self._count_var.set(f"{len(rows)} {'expense' if len(rows) == 1 else 'expenses'}")

        if not rows:
            message = (
                "No expenses yet. Add your first expense!"
                if not expenses else "No expenses match your filters."
            )
            ctk.CTkLabel(self._scroll, text=message, text_color="gray60").grid(
                row=0, column=0, pady=20
            )
            return

        for idx, expense in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, expense)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} expenses. Use filters or search to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, expense: Expense):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        ctk.CTkLabel(
            row, text=format_display_date(expense.date, self._date_format), width=90, anchor="w"
        ).grid(row=0, column=0, padx=4, pady=4)
        ctk.CTkLabel(
            row, text=expense.category, width=120, anchor="w",
            text_color=CATEGORY_COLORS.get(expense.category, "gray"),
        ).grid(row=0, column=1, padx=4)
        ctk.CTkLabel(row, text=expense.description, width=320, anchor="w").grid(
            row=0, column=2, padx=4
        )
        ctk.CTkLabel(
            row, text=format_currency(expense.amount, self._symbol), width=100, anchor="e",
        ).grid(row=0, column=3, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=4, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda e=expense: self._open_edit_form(e),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda e=expense: self._delete_expense(e),
        ).pack(side="left")

    def _open_add_form(self):
        form = ExpenseForm(self.winfo_toplevel(), self._svc, date_format=self._date_format)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _open_edit_form(self, expense: Expense):
        form = ExpenseForm(
            self.winfo_toplevel(), self._svc, expense=expense, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _delete_expense(self, expense: Expense):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Expense",
            f"Delete \"{expense.description}\" ({format_currency(expense.amount, self._symbol)})?",
        )
        if dlg.result:
            self._svc.delete(expense.id)
            self._notify_refresh()
