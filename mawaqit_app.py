#!/usr/bin/env python3
"""
Mawaqit Desktop Widget
Always-on-top bilingual (Arabic / English) window showing:
  - Current location and date (Gregorian + Hijri)
  - Daily prayer times plus Midnight and the Last Third of the night
  - Live countdown to the next event, with its row highlighted
  - Desktop notification when each event arrives
"""

import datetime
import logging
import threading
import tkinter as tk
from tkinter import ttk

from mawaqit import i18n
from mawaqit.config import load_settings
from mawaqit.dashboard import Dashboard
from mawaqit.location import get_location
from mawaqit.methods import method_entries, method_options, order_methods
from mawaqit.notifier import ArrivalWatcher, notify_event
from mawaqit.prayer_api import fetch_methods

logger = logging.getLogger("mawaqit")

# ──────────────────────────────────────────────────────────────────────────────
# Theme constants
# ──────────────────────────────────────────────────────────────────────────────
BG_DARK = "#0d1117"          # near-black background
BG_CARD = "#161b22"          # slightly lighter card
BG_HIGHLIGHT = "#1a3a2a"     # deep green for the highlighted row
BG_NIGHT = "#10162a"         # night rows
BORDER_COLOR = "#2ea043"
ACCENT_GOLD = "#f0c040"
ACCENT_GREEN = "#3fb950"
TEXT_WHITE = "#e6edf3"
TEXT_DIM = "#8b949e"
TEXT_RED = "#ff6b6b"
TEXT_NIGHT = "#9fb4ff"

FONT_UI = ("Arial", 11, "bold")
FONT_UI_SM = ("Arial", 9)
FONT_TIME = ("Courier", 14, "bold")
FONT_TITLE = ("Arial", 12, "bold")
FONT_TIMER = ("Courier", 22, "bold")

WINDOW_W = 420
WINDOW_H = 640

REFRESH_MS = 1000  # update UI every second
RETRY_MS = 60000   # retry a failed load after a minute
BANNER_MS = 15000


class MawaqitApp:
    def __init__(self, root: tk.Tk, settings: dict):
        self.root = root
        self.settings = settings
        self._init_state()

        self._setup_window()
        self._build_ui()
        self._apply_language()
        self._start_methods_load()
        self._reload_data()

    def _init_state(self):
        """Non-widget state: view model, timers and load bookkeeping."""
        self.dashboard = Dashboard(self.settings["language"])
        self.watcher = ArrivalWatcher()
        self._drag_x = 0
        self._drag_y = 0
        self._tick_id = None
        self._retry_id = None
        self._method_entries: list = []
        self._method_keys: list = []
        self._selected_method = str(self.settings["method"])
        self._loading = False
        self._reload_pending = False

    # ──────────────────────────────────────────────────────────────────────
    # Window setup
    # ──────────────────────────────────────────────────────────────────────
    def _setup_window(self):
        root = self.root
        root.title("Mawaqit")
        root.configure(bg=BG_DARK)
        root.resizable(False, False)
        root.overrideredirect(True)        # remove OS title bar
        root.attributes("-topmost", True)  # always on top

        screen_w = root.winfo_screenwidth()
        screen_h = root.winfo_screenheight()
        x = screen_w - WINDOW_W - 40
        y = (screen_h - WINDOW_H) // 2
        root.geometry(f"{WINDOW_W}x{WINDOW_H}+{x}+{y}")

        root.bind("<ButtonPress-1>", self._on_drag_start)
        root.bind("<B1-Motion>", self._on_drag_motion)

    def _on_drag_start(self, event):
        self._drag_x = event.x_root - self.root.winfo_x()
        self._drag_y = event.y_root - self.root.winfo_y()

    def _on_drag_motion(self, event):
        self.root.geometry(f"+{event.x_root - self._drag_x}+{event.y_root - self._drag_y}")

    # ──────────────────────────────────────────────────────────────────────
    # UI construction
    # ──────────────────────────────────────────────────────────────────────
    def _build_ui(self):
        outer = tk.Frame(self.root, bg=BORDER_COLOR, bd=0)
        outer.pack(fill=tk.BOTH, expand=True, padx=2, pady=2)
        inner = tk.Frame(outer, bg=BG_DARK, bd=0)
        inner.pack(fill=tk.BOTH, expand=True, padx=1, pady=1)

        # ── title bar (drag zone + language + close) ─────────────────────
        title_bar = tk.Frame(inner, bg=BG_CARD, height=32)
        title_bar.pack(fill=tk.X, side=tk.TOP)
        title_bar.pack_propagate(False)

        self.lbl_title = tk.Label(title_bar, text="", font=FONT_TITLE, fg=ACCENT_GOLD, bg=BG_CARD)
        self.lbl_title.pack(side=tk.LEFT, padx=8)

        tk.Button(
            title_bar, text=" ✕ ", font=FONT_UI_SM, fg=TEXT_RED, bg=BG_CARD,
            activeforeground=TEXT_WHITE, activebackground="#3a1a1a",
            bd=0, cursor="hand2", command=self.root.destroy,
        ).pack(side=tk.RIGHT, padx=4, pady=4)

        self.btn_lang = tk.Button(
            title_bar, text="", font=FONT_UI_SM, fg=ACCENT_GREEN, bg=BG_CARD,
            activeforeground=TEXT_WHITE, activebackground=BG_HIGHLIGHT,
            bd=0, cursor="hand2", command=self._toggle_language,
        )
        self.btn_lang.pack(side=tk.RIGHT, padx=4, pady=4)

        # ── calculation method ───────────────────────────────────────────
        self.method_frame = tk.Frame(inner, bg=BG_DARK)
        self.method_frame.pack(fill=tk.X, padx=10, pady=(8, 2))
        self.lbl_method = tk.Label(self.method_frame, text="", font=FONT_UI_SM, fg=TEXT_DIM, bg=BG_DARK)
        self.method_var = tk.StringVar()
        self.cmb_method = ttk.Combobox(
            self.method_frame, textvariable=self.method_var, state="readonly", width=38,
        )
        self.cmb_method.bind("<<ComboboxSelected>>", self._on_method_selected)

        # ── spinner (shown while loading) ────────────────────────────────
        self.lbl_spinner = tk.Label(inner, text="", font=FONT_UI, fg=TEXT_DIM, bg=BG_DARK, pady=40)

        # ── content ──────────────────────────────────────────────────────
        self.content = tk.Frame(inner, bg=BG_DARK)

        self.lbl_location = tk.Label(self.content, text="", font=FONT_UI, fg=ACCENT_GREEN, bg=BG_DARK)
        self.lbl_location.pack(pady=(6, 0))
        self.lbl_gregorian = tk.Label(self.content, text="", font=FONT_UI, fg=TEXT_WHITE, bg=BG_DARK)
        self.lbl_gregorian.pack()
        self.lbl_hijri = tk.Label(self.content, text="", font=FONT_UI, fg=ACCENT_GOLD, bg=BG_DARK)
        self.lbl_hijri.pack()
        self.lbl_clock = tk.Label(self.content, text="", font=FONT_TIME, fg=TEXT_DIM, bg=BG_DARK)
        self.lbl_clock.pack(pady=(2, 4))

        self.times_frame = tk.Frame(self.content, bg=BG_DARK)
        self.times_frame.pack(fill=tk.X, padx=10, pady=4)
        self.rows: dict = {}   # event key -> dict of row widgets
        self._build_rows()

        self.lbl_next = tk.Label(self.content, text="", font=FONT_UI, fg=ACCENT_GREEN, bg=BG_DARK)
        self.lbl_next.pack(pady=(8, 0))
        self.lbl_timer = tk.Label(self.content, text="-:--:--", font=FONT_TIMER, fg=ACCENT_GOLD, bg=BG_DARK)
        self.lbl_timer.pack()

        # ── notification banner (hidden by default) ──────────────────────
        self.notif_frame = tk.Frame(self.content, bg="#2d1b00", bd=1, relief=tk.RIDGE)
        self.lbl_notif = tk.Label(
            self.notif_frame, text="", font=FONT_UI_SM, fg=ACCENT_GOLD, bg="#2d1b00", wraplength=380,
        )
        self.lbl_notif.pack(pady=4)

    def _build_rows(self):
        """One row per daily time, then Midnight and the Last Third."""
        for key, _label, _time in self.dashboard.rows():
            is_night = key in ("Midnight", "LastThird")
            row_bg = BG_NIGHT if is_night else BG_CARD
            fg = TEXT_NIGHT if is_night else TEXT_WHITE

            row = tk.Frame(self.times_frame, bg=row_bg, pady=2)
            row.pack(fill=tk.X, pady=1)
            lbl_name = tk.Label(row, text="", font=FONT_UI, fg=fg, bg=row_bg)
            lbl_time = tk.Label(row, text="--:--", font=FONT_TIME, fg=fg, bg=row_bg)
            self.rows[key] = {
                "row": row,
                "lbl_name": lbl_name,
                "lbl_time": lbl_time,
                "bg": row_bg,
                "fg": fg,
            }

    # ──────────────────────────────────────────────────────────────────────
    # Language
    # ──────────────────────────────────────────────────────────────────────
    def _apply_language(self):
        """Re-render every string and flip the layout direction."""
        lang = self.dashboard.language
        rtl = i18n.text_direction(lang) == "rtl"
        name_side, time_side = (tk.RIGHT, tk.LEFT) if rtl else (tk.LEFT, tk.RIGHT)

        self.lbl_title.config(text=f"🕌  {i18n.ui_text('title', lang)}")
        self.btn_lang.config(text=i18n.ui_text("toggle", lang))
        self.lbl_method.config(text=i18n.ui_text("method_label", lang))
        self.lbl_spinner.config(text=i18n.ui_text("loading", lang))

        self.lbl_method.pack_forget()
        self.cmb_method.pack_forget()
        self.lbl_method.pack(side=name_side)
        self.cmb_method.pack(side=time_side, padx=4)

        for key, label, time_str in self.dashboard.rows():
            widgets = self.rows[key]
            widgets["lbl_name"].pack_forget()
            widgets["lbl_time"].pack_forget()
            widgets["lbl_name"].config(text=label)
            widgets["lbl_time"].config(text=time_str)
            widgets["lbl_name"].pack(side=name_side, padx=8)
            widgets["lbl_time"].pack(side=time_side, padx=8)

        self._populate_methods()
        if self.dashboard.loaded:
            self._render_static()

    def _toggle_language(self):
        lang = self.dashboard.toggle_language()
        logger.info("Language switched to %s", lang)
        self._apply_language()
        self._reload_data()

    # ──────────────────────────────────────────────────────────────────────
    # Calculation methods
    # ──────────────────────────────────────────────────────────────────────
    def _start_methods_load(self):
        t = threading.Thread(target=self._load_methods, daemon=True)
        t.start()

    def _load_methods(self):
        """Fetch calculation methods in a background thread."""
        try:
            methods = fetch_methods(timeout=self.settings["timeout"])
        except Exception as exc:
            logger.error("Could not load calculation methods: %s", exc)
            return
        entries = method_entries(methods)
        self.root.after(0, lambda: self._on_methods_loaded(entries))

    def _on_methods_loaded(self, entries: list):
        self._method_entries = entries
        self._populate_methods()

    def _populate_methods(self):
        """Fill the dropdown, default first and the rest by Arabic name."""
        if not self._method_entries:
            return
        ordered = order_methods(
            self._method_entries,
            previous=self._selected_method,
            default_id=self.settings["method"],
        )
        options = method_options(ordered, self.dashboard.language)
        self._method_keys = [key for key, _label in options]
        self.cmb_method.config(values=[label for _key, label in options])
        self.cmb_method.current(0)
        self._selected_method = self._method_keys[0]

    def _on_method_selected(self, _event=None):
        index = self.cmb_method.current()
        if index < 0 or index >= len(self._method_keys):
            return
        key = self._method_keys[index]
        if key == self._selected_method:
            return
        self._selected_method = key
        logger.info("Calculation method changed to %s", key)
        self._reload_data()

    # ──────────────────────────────────────────────────────────────────────
    # Data loading (runs in background thread)
    # ──────────────────────────────────────────────────────────────────────
    def _show_spinner(self):
        self.content.pack_forget()
        self.lbl_spinner.config(text=i18n.ui_text("loading", self.dashboard.language), fg=TEXT_DIM)
        self.lbl_spinner.pack(fill=tk.BOTH, expand=True)

    def _hide_spinner(self):
        self.lbl_spinner.pack_forget()
        self.content.pack(fill=tk.BOTH, expand=True)

    def _reload_data(self):
        """Reload location and prayer times."""
        if self._loading:
            self._reload_pending = True
            return
        if self._retry_id is not None:
            self.root.after_cancel(self._retry_id)
            self._retry_id = None
        self._loading = True
        self._show_spinner()
        method = int(self._selected_method)
        t = threading.Thread(target=self._load_data, args=(method,), daemon=True)
        t.start()

    def _load_data(self, method: int):
        """Fetch location + both days of timings in background thread."""
        try:
            location = get_location(self.settings["location"], timeout=self.settings["timeout"])
            state = self.dashboard.fetch(location, method=method, timeout=self.settings["timeout"])
        except Exception as exc:
            logger.exception("Loading prayer times failed")
            error = str(exc)
            self.root.after(0, lambda: self._on_data_error(error))
            return
        self.root.after(0, lambda: self._on_data_loaded(state))

    def _on_data_loaded(self, state: dict):
        """Called in main thread once data is ready."""
        self._loading = False
        self.dashboard.apply(state)
        self._render_static()
        self._hide_spinner()
        self._start_countdown()
        self._run_pending_reload()

    def _on_data_error(self, error: str):
        """Called in main thread when a load fails; keeps any previous data on screen."""
        self._loading = False
        text = f"⚠ {i18n.ui_text('error', self.dashboard.language)}: {error[:60]}"
        if self.dashboard.loaded:
            self._hide_spinner()
            self._show_banner(text)
        else:
            self.lbl_spinner.config(text=text, fg=TEXT_RED)
        if self._reload_pending:
            self._run_pending_reload()
        else:
            self._retry_id = self.root.after(RETRY_MS, self._retry_reload)

    def _retry_reload(self):
        self._retry_id = None
        logger.info("Retrying failed load")
        self._reload_data()

    def _run_pending_reload(self):
        """A method or language change arrived mid-load; fetch again."""
        if self._reload_pending:
            self._reload_pending = False
            self._reload_data()

    def _render_static(self):
        """Location, dates and row times; these only change on reload or language switch."""
        self.lbl_location.config(text=f"📍 {self.dashboard.location_text()}")
        dates = self.dashboard.dates()
        self.lbl_gregorian.config(text=dates["gregorian"])
        self.lbl_hijri.config(text=dates["hijri"])
        for key, label, time_str in self.dashboard.rows():
            self.rows[key]["lbl_name"].config(text=label)
            self.rows[key]["lbl_time"].config(text=time_str)

    # ──────────────────────────────────────────────────────────────────────
    # Countdown tick
    # ──────────────────────────────────────────────────────────────────────
    def _start_countdown(self):
        """(Re)start the 1 Hz tick; only one loop ever runs."""
        if self._tick_id is not None:
            self.root.after_cancel(self._tick_id)
            self._tick_id = None
        self.watcher.reset()
        self._tick()

    def _now(self) -> datetime.datetime:
        return datetime.datetime.now(self.dashboard.tz)

    def _tick(self):
        """Called every second to update the countdown and highlight."""
        try:
            now = self._now()
            if now.date() != self.dashboard.day and not self._loading and self._retry_id is None:
                logger.info("Day changed, refreshing timings")
                self._reload_data()
            state = self.dashboard.tick(now)
            self.lbl_clock.config(text=state["clock"])
            self.lbl_next.config(text=state["next_label"])
            self.lbl_timer.config(text=state["timer"])
            self._update_highlight(state["highlight"])

            arrived = self.watcher.observe(state["next_name"], state["next_dt"], now)
            if arrived:
                notify_event(arrived, self.dashboard.language, callback=self._on_notification)
        except Exception:
            logger.exception("Tick failed")

        self._tick_id = self.root.after(REFRESH_MS, self._tick)

    def _update_highlight(self, highlight: str):
        """Clear every highlight, then mark the upcoming row."""
        for key, widgets in self.rows.items():
            if key == highlight:
                row_bg, fg = BG_HIGHLIGHT, ACCENT_GOLD
            else:
                row_bg, fg = widgets["bg"], widgets["fg"]
            widgets["row"].config(bg=row_bg)
            widgets["lbl_name"].config(bg=row_bg, fg=fg)
            widgets["lbl_time"].config(bg=row_bg, fg=fg)

    def _on_notification(self, title: str, message: str):
        """Show an in-app banner for an arrived event."""
        self._show_banner(f"{title}\n{message}")
        self.root.bell()

    def _show_banner(self, text: str):
        """Show the banner for a few seconds."""
        self.lbl_notif.config(text=text)
        self.notif_frame.pack(fill=tk.X, padx=14, pady=6)
        self.root.after(BANNER_MS, self.notif_frame.pack_forget)


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────
def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings["log_level"],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    root = tk.Tk()
    MawaqitApp(root, settings)
    root.mainloop()


if __name__ == "__main__":
    main()
