import os
import sys
import customtkinter as ctk
import structlog

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.expense_store import SqliteExpenseStore
from services.expense_service import ExpenseService
from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level, load_config
from utils.log import configure_logging


def main():
    # ── Bootstrap: pre-DB config and logging ─────────────────────────────────
    config = load_config()
    configure_logging(get_log_level(config))
    logger = structlog.get_logger("main")

    # ── Database / store ─────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=get_db_folder(config))
    store = SqliteExpenseStore(db)
    expense_svc = ExpenseService(store)
    logger.info("app_starting", db_path=db.db_path)

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system")
    date_format = db.get_setting("date_format", "MM/DD/YYYY")
    currency_symbol = db.get_setting("currency_symbol", "$")
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        expense_service=expense_svc,
        date_format=date_format,
        currency_symbol=currency_symbol,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
