import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from models.summary import ExpenseSummary, MonthlyTotal
from services.report_service import calculate_summary, monthly_trend
from utils.constants import CATEGORY_COLORS, TREND_MONTHS
from utils.currency import format_currency
from utils.date_helpers import friendly_month, format_month, today


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        get_expenses,   # callable → list[Expense]
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._get_expenses = get_expenses
        self._symbol = currency_symbol

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_summary_cards()
        self._build_bottom_section()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2, 3), weight=1)

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure(0, weight=2)
        bottom.grid_columnconfigure(1, weight=3)
        bottom.grid_rowconfigure(0, weight=1)

        self._breakdown_frame = ctk.CTkScrollableFrame(
            bottom, label_text="Spending by Category", height=300
        )
        self._breakdown_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        self._trend_outer = ctk.CTkFrame(bottom, fg_color=("gray90", "gray20"), corner_radius=8)
        self._trend_outer.grid(row=0, column=1, sticky="nsew", padx=(8, 0))
        ctk.CTkLabel(
            self._trend_outer, text=f"Spending Trends (Last {TREND_MONTHS} Months)",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._trend_fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._trend_ax = self._trend_fig.add_subplot(111)
        self._trend_mpl = FigureCanvasTkAgg(self._trend_fig, master=self._trend_outer)
        self._trend_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

    def _load(self):
        expenses = self._get_expenses()
        summary = calculate_summary(expenses, today())

        for w in self._card_frame.winfo_children():
            w.destroy()
        card_data = [
            ("Total Spending",  format_currency(summary.total_spending, self._symbol),   "#2196F3"),
            ("This Month",      format_currency(summary.monthly_spending, self._symbol), "#4CAF50"),
            ("Average Expense", format_currency(summary.average_expense, self._symbol),  "#9C27B0"),
            ("Total Expenses",  str(summary.expense_count),                             "#FF9800"),
        ]
        for i, (label, text, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, text, color)

        self._load_breakdown(summary)

        trend = monthly_trend(expenses, TREND_MONTHS)
        if trend:
            self._trend_outer.grid()
            self.after(50, lambda t=trend: self._draw_trend_chart(t))
        else:
            self._trend_outer.grid_remove()

    def _load_breakdown(self, summary: ExpenseSummary):
        for w in self._breakdown_frame.winfo_children():
            w.destroy()
        if not summary.category_breakdown:
            ctk.CTkLabel(
                self._breakdown_frame,
                text=f"No expenses yet. {friendly_month(format_month(today()))} is a fresh start.",
                text_color="gray60", wraplength=260,
            ).pack(pady=20)
            return
        for share in summary.category_breakdown:
            f = ctk.CTkFrame(self._breakdown_frame, fg_color="transparent")
            f.pack(fill="x", pady=4, padx=4)
            top_row = ctk.CTkFrame(f, fg_color="transparent")
            top_row.pack(fill="x")
            ctk.CTkLabel(top_row, text=share.category, anchor="w").pack(side="left")
            ctk.CTkLabel(
                top_row,
                text=f"{format_currency(share.amount, self._symbol)} ({share.percentage:.1f}%)",
                anchor="e", text_color="gray60",
            ).pack(side="right")
            bar = ctk.CTkProgressBar(
                f, progress_color=CATEGORY_COLORS.get(share.category, "#888888")
            )
            bar.pack(fill="x", pady=2)
            bar.set(share.percentage / 100)

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _draw_trend_chart(self, trend: list[MonthlyTotal]):
        ax = self._trend_ax
        ax.clear()
        self._style_ax(ax, self._trend_fig)

        x = list(range(len(trend)))
        bars = ax.bar(x, [m.amount for m in trend], 0.6, color="#2196F3")
        ax.bar_label(
            bars, labels=[f"{m.count}" for m in trend], fontsize=7, color="gray",
        )
        ax.set_xticks(x)
        ax.set_xticklabels([m.label for m in trend])
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._trend_mpl.draw_idle()

    def _make_card(self, parent, col, label, text, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card,
            text=text,
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
