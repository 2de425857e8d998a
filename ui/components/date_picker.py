import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from utils.date_helpers import (
    parse_date, format_date, format_display_date, parse_display_date,
)
from datetime import date


class DatePickerWidget(ctk.CTkFrame):
    """Date entry (in the display format) plus a calendar popup button.

    .get() returns a YYYY-MM-DD string, '' when blank, or the raw text when
    it can't be read as a date so callers can report it.
    on_change is called after the value is committed (focus-out, Enter,
    calendar pick or clear).
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        date_format: str = "MM/DD/YYYY",
        placeholder: str = "",
        on_change=None,   # callable → None
        clearable: bool = False,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._date_format = date_format
        self._on_change = on_change
        self._popup: ctk.CTkToplevel | None = None

        display_val = format_display_date(initial_date, date_format) if initial_date else ""
        self._var = tk.StringVar(value=display_val)

        self._entry = ctk.CTkEntry(
            self, textvariable=self._var, width=110, placeholder_text=placeholder,
        )
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._commit)
        self._entry.bind("<Return>", self._commit)

        ctk.CTkButton(
            self, text="📅", width=32, command=self._open_popup
        ).grid(row=0, column=1, padx=(4, 0))

        if clearable:
            ctk.CTkButton(
                self, text="✕", width=24,
                fg_color="transparent", text_color=("gray10", "gray90"),
                command=self.clear,
            ).grid(row=0, column=2, padx=(2, 0))

    def _read(self) -> date | None:
        raw = self._var.get().strip()
        if not raw:
            return None
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def get(self) -> str:
        raw = self._var.get().strip()
        if not raw:
            return ""
        d = self._read()
        return format_date(d) if d else raw

    def set(self, date_str: str):
        """Accept a YYYY-MM-DD string and display it in the chosen format."""
        d = parse_date(date_str) if date_str else None
        if d:
            self._var.set(format_display_date(format_date(d), self._date_format))
        else:
            self._var.set(date_str or "")
        self._reset_border()

    def clear(self):
        self._var.set("")
        self._reset_border()
        self._notify()

    def _commit(self, _event=None):
        raw = self._var.get().strip()
        if raw:
            d = self._read()
            if d:
                self._var.set(format_display_date(format_date(d), self._date_format))
                self._reset_border()
            else:
                self._entry.configure(border_color="#F44336")
        else:
            self._reset_border()
        self._notify()

    def _notify(self):
        if self._on_change:
            self._on_change()

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        # Theme the calendar to match CTk appearance
        if ctk.get_appearance_mode() == "Dark":
            bg, fg = "#2b2b2b", "#ffffff"
        else:
            bg, fg = "#ffffff", "#000000"
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self._read() or date.today()

        # Calendar always uses yyyy-mm-dd internally; we format the result ourselves
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            maxdate=date.today(),
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal, popup))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

        popup.bind("<FocusOut>", lambda e: self._maybe_close(popup))

    def _on_date_selected(self, cal, popup):
        self.set(cal.get_date())
        popup.destroy()
        self._popup = None
        self._notify()

    def _maybe_close(self, popup):
        try:
            focused = popup.focus_get()
        except (KeyError, tk.TclError):
            focused = None
        if focused is None or not str(focused).startswith(str(popup)):
            popup.destroy()
            self._popup = None
