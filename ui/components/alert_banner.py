import customtkinter as ctk

BANNER_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
    "success": "#4CAF50",
}


class AlertBanner(ctk.CTkFrame):
    """A dismissible colored strip for non-blocking notices (export results etc.)."""

    def __init__(self, master, message: str, severity: str = "info",
                 auto_dismiss_ms: int | None = None, **kwargs):
        self._dismiss_after_id = None
        super().__init__(master, fg_color=BANNER_COLORS.get(severity, BANNER_COLORS["info"]),
                         corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", padx=10, pady=6
        ).grid(row=0, column=0, sticky="ew")

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent",
            hover_color="#ffffff",
            text_color="white",
            command=self.destroy,
        ).grid(row=0, column=1, padx=(0, 4))

        if auto_dismiss_ms:
            self._dismiss_after_id = self.after(auto_dismiss_ms, self._dismiss)

    def _dismiss(self):
        self._dismiss_after_id = None
        self.destroy()

    def destroy(self):
        # a replaced or closed banner must not leave its timer pointing at a dead widget
        if self._dismiss_after_id is not None:
            self.after_cancel(self._dismiss_after_id)
            self._dismiss_after_id = None
        super().destroy()
