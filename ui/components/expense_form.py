import customtkinter as ctk
import structlog

from models.expense import Expense, ExpenseFormData
from services.expense_service import ExpenseService
from services.validation import ExpenseValidationError, validate_expense_form
from ui.components.confirm_dialog import center_on_master
from ui.components.date_picker import DatePickerWidget
from utils.constants import DEFAULT_CATEGORY, EXPENSE_CATEGORIES, MAX_DESCRIPTION_LENGTH
from utils.date_helpers import today_str

logger = structlog.get_logger(__name__)

_FIELDS = ("date", "amount", "category", "description")


class ExpenseForm(ctk.CTkToplevel):
    """Add or edit an expense. Errors are shown under each field."""

    _last_date: str = today_str()  # reset to today on each app launch

    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        expense: Expense | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = expense_service
        self._expense = expense
        self._date_format = date_format
        self._touched: set[str] = set()
        self.saved: Expense | None = None

        self.title("Edit Expense" if expense else "Add Expense")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        initial = (
            ExpenseFormData.from_expense(expense) if expense
            else ExpenseFormData(ExpenseForm._last_date, "", DEFAULT_CATEGORY, "")
        )
        self._error_vars = {f: ctk.StringVar() for f in _FIELDS}
        self._build(initial)

        self.transient(master)
        self.grab_set()
        center_on_master(self)

    def _build(self, initial: ExpenseFormData):
        r = 0
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=initial.date, date_format=self._date_format,
            on_change=lambda: self._on_field_changed("date"),
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=(12, 0), sticky="w")
        r = self._error_label("date", r + 1)

        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=initial.amount)
        amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, width=220,
                                    placeholder_text="0.00")
        amount_entry.grid(row=r, column=1, padx=(0, 16), pady=(4, 0), sticky="ew")
        amount_entry.bind("<FocusOut>", lambda _: self._on_field_changed("amount"))
        r = self._error_label("amount", r + 1)

        self._label("Category:", r)
        self._cat_var = ctk.StringVar(value=initial.category)
        ctk.CTkComboBox(
            self, values=EXPENSE_CATEGORIES, variable=self._cat_var,
            width=220, state="readonly",
            command=lambda _: self._on_field_changed("category"),
        ).grid(row=r, column=1, padx=(0, 16), pady=(4, 0), sticky="ew")
        r = self._error_label("category", r + 1)

        self._label("Description:", r)
        self._desc_var = ctk.StringVar(value=initial.description)
        self._desc_var.trace_add("write", lambda *_: self._update_counter())
        desc_entry = ctk.CTkEntry(self, textvariable=self._desc_var, width=220,
                                  placeholder_text="What was it for?")
        desc_entry.grid(row=r, column=1, padx=(0, 16), pady=(4, 0), sticky="ew")
        desc_entry.bind("<FocusOut>", lambda _: self._on_field_changed("description"))
        r += 1
        self._counter_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._counter_var, text_color="gray60",
            font=ctk.CTkFont(size=10), anchor="e",
        ).grid(row=r, column=1, padx=(0, 16), sticky="e")
        self._update_counter()
        r = self._error_label("description", r + 1)

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.grid(row=r, column=0, columnspan=2, padx=16, pady=(8, 16), sticky="ew")
        ctk.CTkButton(
            btns, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btns, text="Update Expense" if self._expense else "Add Expense",
            width=120, command=self._on_save,
        ).pack(side="right")

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=(4, 0), sticky="e"
        )

    def _error_label(self, field: str, row: int) -> int:
        ctk.CTkLabel(
            self, textvariable=self._error_vars[field],
            text_color="#F44336", font=ctk.CTkFont(size=11),
            anchor="w", height=16,
        ).grid(row=row, column=1, padx=(0, 16), sticky="w")
        return row + 1

    def _update_counter(self):
        n = len(self._desc_var.get())
        self._counter_var.set(f"{n}/{MAX_DESCRIPTION_LENGTH}")

    def _form_data(self) -> ExpenseFormData:
        return ExpenseFormData(
            date=self._date_picker.get(),
            amount=self._amount_var.get(),
            category=self._cat_var.get(),
            description=self._desc_var.get(),
        )

    def _show_errors(self, errors: dict[str, str]):
        for field, var in self._error_vars.items():
            var.set(errors.get(field, "") if field in self._touched else "")

    def _on_field_changed(self, field: str):
        self._touched.add(field)
        self._show_errors(validate_expense_form(self._form_data()))

    def _on_save(self):
        self._touched.update(_FIELDS)
        form = self._form_data()
        try:
            if self._expense:
                saved = self._svc.update(self._expense.id, form)
            else:
                saved = self._svc.create(form)
        except ExpenseValidationError as e:
            self._show_errors(e.errors)
            return
        except ValueError as e:
            logger.warning("expense_save_rejected", error=str(e))
            self._error_vars["description"].set(str(e))
            return
        ExpenseForm._last_date = saved.date
        self.saved = saved
        self.destroy()
