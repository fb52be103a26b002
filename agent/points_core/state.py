"""
RunState and Stats — the mutable state owned by the LifecycleController.

Stats is written from cycle worker threads (overlapping cycles share it),
so every counter update happens under its lock.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RunState(str, Enum):
    IDLE = "Idle"
    RUNNING = "Running"


@dataclass(frozen=True)
class StatsSnapshot:
    requests: int
    successes: int
    errors: int
    last_known_points: Optional[int]


@dataclass
class Stats:
    requests: int = 0
    successes: int = 0
    errors: int = 0
    last_known_points: Optional[int] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_attempt(self):
        with self._lock:
            self.requests += 1

    def record_success(self, points=None):
        """Count a successful cycle; `points` is the after-read balance, if any."""
        with self._lock:
            self.successes += 1
            if points is not None:
                self.last_known_points = points

    def record_error(self):
        with self._lock:
            self.errors += 1

    def reset(self, preserve_points=True):
        with self._lock:
            self.requests = 0
            self.successes = 0
            self.errors = 0
            if not preserve_points:
                self.last_known_points = None

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(self.requests, self.successes, self.errors, self.last_known_points)
