"""
Constants, timing defaults, capacities, and theme colors.
"""

AGENT_VERSION = "1.0.0"

# ─── Timing ──────────────────────────────────────────────────────
DEFAULT_INTERVAL_SEC = 30      # Polling period when nothing is saved
SETTLE_DELAY_SEC = 2.0         # Wait after a grant before re-reading points
UI_POLL_MS = 300               # Window refresh cadence

# ─── Engine ──────────────────────────────────────────────────────
LOG_CAPACITY = 100             # Event log keeps the last 100 entries
ERROR_WARNING_THRESHOLD = 3    # Warn once errors exceed this with zero successes

SEVERITIES = ("info", "success", "warning", "error")

# ─── Network ─────────────────────────────────────────────────────
DEFAULT_SERVER_URL = "http://127.0.0.1:8080"
API_TIMEOUT_READ = 15          # Seconds for GET /api/getUser
API_TIMEOUT_GRANT = 20         # Seconds for POST /api/addPointGame
USER_AGENT = "okhttp/4.12.0"

# ─── Persisted settings ──────────────────────────────────────────
SETTINGS_NAMESPACE = "cashplayPointsSettings"

# ─── Theme Colors ────────────────────────────────────────────────
THEME = {
    "bg_dark":       "#0f172a",   # window bg
    "bg_card":       "#1e293b",   # card background
    "bg_input":      "#0f172a",   # input field bg
    "header_bg":     "#0a2c54",   # header background
    "primary":       "#3b82f6",   # blue button
    "primary_hover": "#2563eb",   # button hover
    "text_primary":  "#f1f5f9",   # white text
    "text_secondary":"#cbd5e1",   # light gray
    "text_muted":    "#94a3b8",   # muted text
    "border":        "#374151",   # borders
    "success":       "#22c55e",   # green
    "error":         "#ef4444",   # red
    "warning":       "#fbbf24",   # yellow
    "info":          "#60a5fa",   # light blue
}
