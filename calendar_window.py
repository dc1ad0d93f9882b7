"""Month complication window (tkinter) positioned bottom-right of the screen."""

import logging
from typing import Callable
import tkinter as tk

from PIL import ImageTk

from calendar_logic import ConfigurationError
from icon_gen import render_blank, render_complication
from settings import load_settings, save_settings
from timeline import ComplicationEntry, TimelineProvider

log = logging.getLogger(__name__)

GRID_BG = "black"

DEFAULT_SIZE = (280, 240)


class CalendarWindow:
    """Single-month calendar that redraws to fit its window."""

    def __init__(self, provider: TimelineProvider, settings: dict | None = None) -> None:
        self.provider = provider
        settings = settings if settings is not None else load_settings()
        self.font_size: int = settings["font_size"]
        self.title_rows: int = settings["title_rows"]
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]

        self.root = tk.Tk()
        self.root.title("Calendar")
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self.canvas = tk.Canvas(self.root, bg=GRID_BG, highlightthickness=0,
                                borderwidth=0)
        self.canvas.pack(fill="both", expand=True)

        self._entry: ComplicationEntry | None = None
        # Tk drops the image if the PhotoImage is garbage collected
        self._photo: ImageTk.PhotoImage | None = None
        self._refresh_after_id: str | None = None
        # Called with each new entry, e.g. to refresh the tray icon
        self.on_reload: Callable[[ComplicationEntry], None] | None = None

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.canvas.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

        self.reload()

    # ------------------------------------------------------------------
    # Timeline: load the current entry, schedule the next reload
    # ------------------------------------------------------------------
    def reload(self) -> None:
        self._refresh_after_id = None
        try:
            timeline = self.provider.timeline()
        except ConfigurationError:
            log.exception("Cannot build month grid; showing blank complication")
            self._entry = None
            self._redraw()
            return

        self._entry = timeline.entries[0] if timeline.entries else None
        self._redraw()
        if self._entry is not None and self.on_reload is not None:
            self.on_reload(self._entry)

        delay_ms = timeline.policy.delay_ms()
        if delay_ms is not None:
            self._refresh_after_id = self.root.after(delay_ms, self.reload)
            log.debug("Next reload in %d ms", delay_ms)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()
        self._redraw(event.width, event.height)

    def _redraw(self, width: int | None = None, height: int | None = None) -> None:
        canvas = self.canvas
        if width is None:
            width = canvas.winfo_width()
        if height is None:
            height = canvas.winfo_height()
        if width <= 1 or height <= 1:
            # Not mapped yet
            width, height = self._window_size()

        if self._entry is None:
            img = render_blank((width, height))
        else:
            img = render_complication(self._entry, (width, height),
                                      self.font_size, self.title_rows)
        self._photo = ImageTk.PhotoImage(img, master=self.root)
        canvas.delete("all")
        canvas.create_image(0, 0, image=self._photo, anchor="nw")

    def _window_size(self) -> tuple[int, int]:
        if self._saved_width is not None and self._saved_height is not None:
            return self._saved_width, self._saved_height
        return DEFAULT_SIZE

    # ------------------------------------------------------------------
    # Persist window size
    # ------------------------------------------------------------------
    def _persist_size(self) -> None:
        settings = load_settings()
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        save_settings(settings)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        # Pick up a date change that happened while hidden
        if self._refresh_after_id is not None:
            self.root.after_cancel(self._refresh_after_id)
        self.reload()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self._saved_width is not None and self._saved_height is not None:
            self._persist_size()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w, win_h = self._window_size()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
