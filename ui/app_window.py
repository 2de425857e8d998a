import customtkinter as ctk
import structlog
from tkinter import filedialog

from models.expense import Expense
from services.expense_service import ExpenseService
from services.export_service import default_filename, export_csv
from ui.components.alert_banner import AlertBanner
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.expenses_tab import ExpensesTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT

logger = structlog.get_logger(__name__)


class AppWindow(ctk.CTk):
    """Main window. Owns the in-memory expense list; tabs read it via get_expenses."""

    def __init__(
        self,
        expense_service: ExpenseService,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._svc = expense_service
        self._date_format = date_format
        self._symbol = currency_symbol
        self._expenses: list[Expense] = self._svc.get_all()

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()

    # ── Header ──────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=64)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        titles = ctk.CTkFrame(bar, fg_color="transparent")
        titles.pack(side="left", padx=16, pady=6)
        ctk.CTkLabel(
            titles, text=APP_NAME, font=ctk.CTkFont(size=20, weight="bold"), anchor="w",
        ).pack(anchor="w")
        ctk.CTkLabel(
            titles, text="Manage your personal finances with ease",
            text_color="gray60", anchor="w",
        ).pack(anchor="w")

        ctk.CTkButton(
            bar, text="Export CSV", width=110, command=self._export_csv,
        ).pack(side="right", padx=16)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Expenses"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            get_expenses=self.get_expenses,
            currency_symbol=self._symbol,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._expenses_tab = ExpensesTab(
            self._tabview.tab("Expenses"),
            expense_service=self._svc,
            get_expenses=self.get_expenses,
            notify_refresh=self.notify_tabs_refresh,
            date_format=self._date_format,
            currency_symbol=self._symbol,
        )
        self._expenses_tab.grid(row=0, column=0, sticky="nsew")

    def get_expenses(self) -> list[Expense]:
        return self._expenses

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self):
        self._expenses = self._svc.get_all()
        self._dashboard_tab.refresh()
        self._expenses_tab.refresh()

    # ── Export ───────────────────────────────────────────────────────────────
    def _export_csv(self):
        if not self._expenses:
            self.show_banner("No expenses to export.", "warning")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=default_filename(),
        )
        if not path:
            return
        try:
            count = export_csv(self._expenses, path)
        except OSError as e:
            logger.error("export_failed", path=path, error=str(e))
            self.show_banner(f"Export failed: {e}", "error")
            return
        self.show_banner(f"Exported {count} expense{'s' if count != 1 else ''} to {path}", "success")

    def show_banner(self, message: str, severity: str = "info"):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(
            self._banner_frame, message=message, severity=severity, auto_dismiss_ms=6000,
        ).pack(fill="x", pady=2)
