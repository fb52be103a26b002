"""
Paths, logging setup, settings load/save, safe_print, server URL.
"""

import os
import json
import sys
import logging
from pathlib import Path

from .constants import DEFAULT_INTERVAL_SEC, DEFAULT_SERVER_URL, SETTINGS_NAMESPACE


# ─── Paths ───────────────────────────────────────────────────────
# One settings file per user profile; CASHPLAY_HOME overrides the location.
_FOLDER_NAME = ".cashplay-points"

BASE_DIR = Path(os.environ.get("CASHPLAY_HOME") or Path.home() / _FOLDER_NAME)

SETTINGS_FILE = BASE_DIR / "settings.json"
LOG_FILE = BASE_DIR / "agent.log"

DEFAULT_SETTINGS = {
    "uid": "",
    "email": "",
    "deviceId": "",
    "interval": DEFAULT_INTERVAL_SEC,
}


def server_url():
    """Base URL of the points API (no trailing slash)."""
    return os.environ.get("CASHPLAY_SERVER_URL", DEFAULT_SERVER_URL).rstrip("/")


# ─── Safe print (no crash without a console) ─────────────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except (OSError, ValueError):
        pass


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger("points")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug=False, log_file=None):
    """Attach file + console handlers to the `points` logger.

    The log file is truncated once it grows past 1 MB. A log file that
    cannot be opened leaves console logging in place.
    """
    level = logging.DEBUG if debug else logging.INFO
    log_file = Path(log_file) if log_file else LOG_FILE
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if log_file.exists() and log_file.stat().st_size > 1_000_000:
            log_file.write_text("")
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    except OSError as e:
        log.warning("File logging disabled (%s): %s", log_file, e)

    log.debug("Logging ready (level=%s, file=%s)", logging.getLevelName(level), log_file)


# ─── Settings persistence ───────────────────────────────────────

def load_settings(path=None):
    """
    Load the saved {uid, email, deviceId, interval} record.
    Missing or corrupt data falls back to DEFAULT_SETTINGS, never raises.
    """
    path = Path(path) if path else SETTINGS_FILE
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f).get(SETTINGS_NAMESPACE)
    except (json.JSONDecodeError, AttributeError, OSError) as e:
        log.warning("Ignoring unreadable settings at %s: %s", path, e)
        return settings

    if not isinstance(stored, dict):
        return settings

    for key in DEFAULT_SETTINGS:
        value = stored.get(key)
        if value:
            settings[key] = value
    return settings


def save_settings(settings, path=None):
    """Persist the settings record under the namespace key."""
    path = Path(path) if path else SETTINGS_FILE
    record = {key: settings.get(key, DEFAULT_SETTINGS[key]) for key in DEFAULT_SETTINGS}
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({SETTINGS_NAMESPACE: record}, f, indent=2)
    log.debug("Settings saved to %s", path)
