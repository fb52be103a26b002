"""
EventLog — bounded, append-only audit trail shown to the operator.

Written from cycle worker threads, read from the UI thread; a lock
serializes both. Each entry is mirrored to the `points` logger.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime

from .config import log
from .constants import LOG_CAPACITY, SEVERITIES

_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class LogEntry:
    timestamp: str          # HH:MM:SS, local time
    severity: str
    message: str


class EventLog:

    def __init__(self, capacity=LOG_CAPACITY):
        self._entries = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self.revision = 0   # Bumped on every change so pollers can skip redraws

    def append(self, severity, message):
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity!r}")
        entry = LogEntry(datetime.now().strftime("%H:%M:%S"), severity, message)
        with self._lock:
            self._entries.append(entry)
            self.revision += 1
        log.log(_LEVELS[severity], "[%s] %s", severity, message)
        return entry

    def info(self, message):
        return self.append("info", message)

    def success(self, message):
        return self.append("success", message)

    def warning(self, message):
        return self.append("warning", message)

    def error(self, message):
        return self.append("error", message)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self.revision += 1

    def entries(self):
        with self._lock:
            return tuple(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)
