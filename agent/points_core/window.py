"""
PointsWindow — Tkinter operator surface.

Created and managed EXCLUSIVELY on the Tkinter main thread. It holds no
engine logic: button handlers call the LifecycleController, and a
root.after() refresh copies controller state (status, stats, account,
event log) into widgets. Cycle threads never touch Tk.
"""

import tkinter as tk

from .config import log, save_settings
from .constants import AGENT_VERSION, DEFAULT_INTERVAL_SEC, THEME, UI_POLL_MS


_FIELD_KEYS = ("uid", "email", "deviceId")
_FONT = "Segoe UI"


class TkScheduler:
    """Timer backend on the Tk event loop; callbacks run on the main thread."""

    def __init__(self, root):
        self._root = root

    def call_later(self, delay_sec, callback):
        return self._root.after(int(delay_sec * 1000), callback)

    def cancel(self, handle):
        try:
            self._root.after_cancel(handle)
        except tk.TclError:
            # Window already destroyed; its pending timers died with it
            pass


class PointsWindow:
    """
    Lifecycle (all on main thread):
      build()      → creates widgets, starts _refresh() loop
      _on_start()  → controller.start(); focuses the bad field on failure
      _refresh()   → redraws status / stats / account / log   (every 300ms)
    """

    def __init__(self, root, controller, settings, settings_path=None):
        self._root = root
        self._controller = controller
        self._settings_path = settings_path
        self._auto_scroll = True
        self._log_revision = -1

        self._vars = {key: tk.StringVar(value=str(settings.get(key, ""))) for key in _FIELD_KEYS}
        try:
            interval = int(settings.get("interval"))
        except (TypeError, ValueError):
            interval = DEFAULT_INTERVAL_SEC
        self._interval_var = tk.IntVar(value=interval)
        self._entries = {}

    # ─── UI construction ─────────────────────────────────────

    def build(self):
        root = self._root
        root.title("CashPlay Points Agent")
        root.configure(bg=THEME["bg_dark"])
        root.minsize(640, 720)

        header = tk.Frame(root, bg=THEME["header_bg"], padx=20, pady=14)
        header.pack(fill="x")
        tk.Label(header, text="CashPlay Points", font=(_FONT, 16, "bold"),
                 fg="white", bg=THEME["header_bg"]).pack(side="left")
        tk.Label(header, text="v" + AGENT_VERSION, font=(_FONT, 9),
                 fg=THEME["text_muted"], bg=THEME["header_bg"]).pack(side="left", padx=(8, 0))
        self._status_text = tk.Label(header, text="Idle", font=(_FONT, 11, "bold"),
                                     fg=THEME["text_muted"], bg=THEME["header_bg"])
        self._status_text.pack(side="right")
        self._status_dot = tk.Label(header, text="●", font=(_FONT, 14),
                                    fg=THEME["error"], bg=THEME["header_bg"])
        self._status_dot.pack(side="right", padx=(0, 6))

        body = tk.Frame(root, bg=THEME["bg_dark"], padx=20, pady=16)
        body.pack(fill="both", expand=True)

        self._build_form(body)
        self._build_controls(body)
        self._build_stats(body)
        self._build_account(body)
        self._build_log(body)

        for var in self._vars.values():
            var.trace_add("write", lambda *_: self._save())
        self._interval_var.trace_add("write", lambda *_: self._save())
        root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._refresh()

    def _card(self, parent, title):
        card = tk.Frame(parent, bg=THEME["bg_card"], padx=14, pady=10,
                        highlightthickness=1, highlightbackground=THEME["border"])
        card.pack(fill="x", pady=(0, 10))
        tk.Label(card, text=title, font=(_FONT, 10, "bold"),
                 fg=THEME["text_secondary"], bg=THEME["bg_card"]).pack(anchor="w", pady=(0, 6))
        return card

    def _build_form(self, parent):
        card = self._card(parent, "Settings")
        labels = {"uid": "User UID", "email": "E-mail", "deviceId": "Device ID"}
        for key in _FIELD_KEYS:
            row = tk.Frame(card, bg=THEME["bg_card"])
            row.pack(fill="x", pady=2)
            tk.Label(row, text=labels[key], width=12, anchor="w", font=(_FONT, 10),
                     fg=THEME["text_muted"], bg=THEME["bg_card"]).pack(side="left")
            entry = tk.Entry(row, textvariable=self._vars[key], font=(_FONT, 10),
                             bg=THEME["bg_input"], fg=THEME["text_primary"],
                             insertbackground=THEME["text_primary"], relief="flat",
                             disabledbackground=THEME["bg_card"])
            entry.pack(side="left", fill="x", expand=True, ipady=4)
            entry.bind("<Return>", lambda e: self._on_enter())
            self._entries[key] = entry

        row = tk.Frame(card, bg=THEME["bg_card"])
        row.pack(fill="x", pady=(6, 0))
        tk.Label(row, text="Interval (s)", width=12, anchor="w", font=(_FONT, 10),
                 fg=THEME["text_muted"], bg=THEME["bg_card"]).pack(side="left")
        self._interval_scale = tk.Scale(
            row, from_=1, to=300, orient="horizontal", variable=self._interval_var,
            bg=THEME["bg_card"], fg=THEME["text_primary"], troughcolor=THEME["bg_input"],
            highlightthickness=0, relief="flat",
        )
        self._interval_scale.pack(side="left", fill="x", expand=True)
        self._entries["interval"] = self._interval_scale

    def _build_controls(self, parent):
        row = tk.Frame(parent, bg=THEME["bg_dark"])
        row.pack(fill="x", pady=(0, 10))

        def button(text, command, color):
            return tk.Button(row, text=text, command=command, font=(_FONT, 10, "bold"),
                             bg=color, fg="white", activebackground=THEME["primary_hover"],
                             relief="flat", padx=14, pady=6, cursor="hand2")

        self._start_btn = button("Start", self._on_start, THEME["success"])
        self._start_btn.pack(side="left")
        self._stop_btn = button("Stop", self._on_stop, THEME["error"])
        self._stop_btn.pack(side="left", padx=(8, 0))
        self._autoscroll_btn = button("Auto Scroll", self._toggle_auto_scroll, THEME["primary"])
        self._autoscroll_btn.pack(side="right")
        button("Clear Log", self._controller.clear_log, THEME["bg_card"]).pack(side="right", padx=(0, 8))

    def _build_stats(self, parent):
        row = tk.Frame(parent, bg=THEME["bg_dark"])
        row.pack(fill="x", pady=(0, 10))
        self._stat_labels = {}
        for key, title in (("requests", "Requests"), ("successes", "Successes"),
                           ("errors", "Errors"), ("points", "Total Points")):
            tile = tk.Frame(row, bg=THEME["bg_card"], padx=10, pady=8)
            tile.pack(side="left", fill="x", expand=True, padx=(0, 6))
            value = tk.Label(tile, text="0", font=(_FONT, 16, "bold"),
                             fg=THEME["text_primary"], bg=THEME["bg_card"])
            value.pack()
            tk.Label(tile, text=title, font=(_FONT, 9),
                     fg=THEME["text_muted"], bg=THEME["bg_card"]).pack()
            self._stat_labels[key] = value

    def _build_account(self, parent):
        card = self._card(parent, "Account")
        grid = tk.Frame(card, bg=THEME["bg_card"])
        grid.pack(fill="x")
        self._account_labels = {}
        fields = (("uid", "UID"), ("email", "E-mail"), ("points", "Points"),
                  ("total_games", "Total Games"), ("invite_code", "Invite Code"),
                  ("total_referrals", "Total Referrals"))
        for i, (key, title) in enumerate(fields):
            r, c = divmod(i, 3)
            tk.Label(grid, text=title, font=(_FONT, 9), fg=THEME["text_muted"],
                     bg=THEME["bg_card"]).grid(row=r * 2, column=c, sticky="w", padx=(0, 24))
            value = tk.Label(grid, text="N/A", font=(_FONT, 10, "bold"),
                             fg=THEME["text_primary"], bg=THEME["bg_card"])
            value.grid(row=r * 2 + 1, column=c, sticky="w", padx=(0, 24), pady=(0, 6))
            self._account_labels[key] = value

    def _build_log(self, parent):
        card = tk.Frame(parent, bg=THEME["bg_card"], padx=10, pady=10)
        card.pack(fill="both", expand=True)
        scrollbar = tk.Scrollbar(card)
        scrollbar.pack(side="right", fill="y")
        self._log_text = tk.Text(card, height=14, font=("Consolas", 9), wrap="word",
                                 bg=THEME["bg_input"], fg=THEME["text_secondary"],
                                 relief="flat", state="disabled",
                                 yscrollcommand=scrollbar.set)
        self._log_text.pack(fill="both", expand=True)
        scrollbar.config(command=self._log_text.yview)
        for severity in ("info", "success", "warning", "error"):
            self._log_text.tag_configure(severity, foreground=THEME[severity])

    # ─── Settings ────────────────────────────────────────────

    def _collect_settings(self):
        settings = {key: var.get() for key, var in self._vars.items()}
        try:
            settings["interval"] = self._interval_var.get()
        except tk.TclError:
            settings["interval"] = ""
        return settings

    def _save(self):
        try:
            save_settings(self._collect_settings(), self._settings_path)
        except OSError as e:
            log.warning("Could not save settings: %s", e)

    # ─── Controls ────────────────────────────────────────────

    def _on_enter(self):
        if not self._controller.is_running:
            self._on_start()
        return "break"

    def _on_start(self):
        if self._controller.start(self._collect_settings()):
            self._refresh_controls()
            return
        error = self._controller.validation_error
        widget = self._entries.get(error.field) if error else None
        if widget is not None:
            widget.focus_set()

    def _on_stop(self):
        self._controller.stop()
        self._refresh_controls()

    def _on_close(self):
        """Stop the run before the Tk app goes away, then close the window."""
        self._controller.stop()
        try:
            self._root.destroy()
        except tk.TclError:
            pass

    def _toggle_auto_scroll(self):
        self._auto_scroll = not self._auto_scroll
        self._autoscroll_btn.config(
            text="Auto Scroll" if self._auto_scroll else "Manual Scroll",
            bg=THEME["primary"] if self._auto_scroll else THEME["bg_card"],
        )

    # ─── Refresh (every 300ms) ───────────────────────────────

    def _refresh(self):
        try:
            self._refresh_controls()
            self._refresh_stats()
            self._refresh_account()
            self._refresh_log()
        except tk.TclError as e:
            log.error("Window refresh error: %s", e)
            return
        self._root.after(UI_POLL_MS, self._refresh)

    def _refresh_controls(self):
        running = self._controller.is_running
        self._start_btn.config(state="disabled" if running else "normal")
        self._stop_btn.config(state="normal" if running else "disabled")
        for widget in self._entries.values():
            widget.config(state="disabled" if running else "normal")
        if running:
            self._status_dot.config(fg=THEME["success"])
            self._status_text.config(text="Running", fg=THEME["success"])
        else:
            self._status_dot.config(fg=THEME["error"])
            self._status_text.config(text="Idle", fg=THEME["text_muted"])

    def _refresh_stats(self):
        stats = self._controller.stats.snapshot()
        self._stat_labels["requests"].config(text=str(stats.requests))
        self._stat_labels["successes"].config(text=str(stats.successes))
        self._stat_labels["errors"].config(text=str(stats.errors))
        points = stats.last_known_points
        self._stat_labels["points"].config(text="-" if points is None else str(points))

    def _refresh_account(self):
        account = self._controller.current_account
        if account is None:
            return
        values = {
            "uid": account.uid or "N/A",
            "email": account.email or "N/A",
            "points": account.points if account.points is not None else 0,
            "total_games": account.total_games,
            "invite_code": account.invite_code or "N/A",
            "total_referrals": account.total_referrals,
        }
        for key, value in values.items():
            self._account_labels[key].config(text=str(value))

    def _refresh_log(self):
        event_log = self._controller.event_log
        if event_log.revision == self._log_revision:
            return
        self._log_revision = event_log.revision
        entries = event_log.entries()

        text = self._log_text
        text.config(state="normal")
        text.delete("1.0", "end")
        if not entries:
            text.insert("end", "Log is empty. Click \"Start\" to begin.\n", "info")
        for entry in entries:
            text.insert("end", f"{entry.timestamp}  {entry.message}\n", entry.severity)
        text.config(state="disabled")
        if self._auto_scroll:
            text.see("end")
