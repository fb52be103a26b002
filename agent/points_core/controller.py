"""
LifecycleController — Idle/Running state machine driving update cycles.

start() validates, runs one cycle immediately, then re-arms a one-shot
timer every `interval` seconds. stop() cancels the pending timer; cycles
already in flight finish on their worker threads but nothing new is
scheduled.

The controller never blocks: cycles run on short-lived daemon threads and
report back through _on_outcome(). Timer callbacks carry the run id they
were armed for, so a late tick from a previous run is ignored.
"""

import threading
import time

from .config import log
from .constants import ERROR_WARNING_THRESHOLD
from .cycle import run_cycle
from .errors import ValidationError
from .event_log import EventLog
from .models import CycleSuccess
from .state import RunState, Stats
from .validation import validate_settings


def _spawn_thread(target):
    threading.Thread(target=target, daemon=True).start()


class LifecycleController:
    """
    Owns RunState, Stats and EventLog. A presentation layer reads them;
    it never writes them directly.
    """

    def __init__(self, client, scheduler, event_log=None, stats=None,
                 spawn=_spawn_thread, sleep=time.sleep):
        self.event_log = event_log if event_log is not None else EventLog()
        self.stats = stats if stats is not None else Stats()
        self.state = RunState.IDLE
        self.config = None
        self.validation_error = None
        self.current_account = None
        self.last_outcome = None

        self._client = client
        self._scheduler = scheduler
        self._spawn = spawn
        self._sleep = sleep
        self._lock = threading.RLock()
        self._timer = None
        self._run_id = 0
        self._in_flight = 0

        # Escalation bookkeeping, scoped to the current run
        self._consecutive_errors = 0
        self._run_successes = 0
        self._warned = False

    @property
    def is_running(self):
        return self.state is RunState.RUNNING

    @property
    def cycles_in_flight(self):
        return self._in_flight

    # ─── Lifecycle ───────────────────────────────────────────

    def start(self, settings, **run_options):
        """
        Validate `settings` and start polling. Returns True if a run started.
        On a validation failure the error is logged, kept in
        `validation_error`, and the controller stays Idle.
        """
        with self._lock:
            if self.state is RunState.RUNNING:
                log.debug("start() ignored — already running")
                return False

            try:
                config = validate_settings(settings, **run_options)
            except ValidationError as e:
                self.validation_error = e
                self.event_log.error(e.message)
                return False

            self.validation_error = None
            self.config = config
            self.state = RunState.RUNNING
            self._run_id += 1
            self._consecutive_errors = 0
            self._run_successes = 0
            self._warned = False

            self.event_log.info(f"Starting monitoring for user: {config.uid}")
            self.event_log.info(f"E-mail: {config.email}")
            self.event_log.info(f"Device ID: {config.device_id}")
            self.event_log.info(f"Interval: {config.interval} seconds")

            # First feedback is immediate, not deferred to the first tick
            self._launch_cycle(config, self._run_id)
            if self.state is RunState.RUNNING:
                self._arm()
            return True

    def stop(self):
        """Cancel future cycles. No-op (and no log entry) when already Idle."""
        with self._lock:
            if self.state is RunState.IDLE:
                return False
            self._cancel_timer()
            self.state = RunState.IDLE
            self._run_id += 1
        self.event_log.info("Monitoring stopped by user")
        return True

    def clear_log(self):
        """Empty the event log and zero the counters, keeping the last points."""
        self.event_log.clear()
        self.stats.reset(preserve_points=True)

    # ─── Timer ───────────────────────────────────────────────

    def _arm(self):
        run_id = self._run_id
        self._timer = self._scheduler.call_later(
            self.config.interval, lambda: self._on_tick(run_id)
        )

    def _cancel_timer(self):
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None

    def _on_tick(self, run_id):
        with self._lock:
            if self.state is not RunState.RUNNING or run_id != self._run_id:
                return
            self._timer = None
            config = self.config
            skip = not config.allow_overlap and self._in_flight > 0
            self._arm()
            if not skip:
                self._launch_cycle(config, run_id)

        if skip:
            self.event_log.warning("Previous cycle still running — skipping this tick")

    # ─── Cycles ──────────────────────────────────────────────

    def _launch_cycle(self, config, run_id):
        self._in_flight += 1
        self._spawn(lambda: self._execute(config, run_id))

    def _execute(self, config, run_id):
        outcome = None
        try:
            outcome = run_cycle(
                config, self._client, self.event_log, self.stats,
                sleep=self._sleep, on_account=self._set_account,
            )
        except Exception as e:
            log.error("Unexpected error in update cycle: %s", e, exc_info=True)
            self.stats.record_error()
            self.event_log.error(f"Unexpected error: {e}")
        finally:
            self._on_outcome(outcome, run_id)

    def _set_account(self, snapshot):
        self.current_account = snapshot

    def _on_outcome(self, outcome, run_id):
        with self._lock:
            self._in_flight -= 1
            self.last_outcome = outcome
            if run_id != self._run_id:
                return

            if isinstance(outcome, CycleSuccess):
                self._consecutive_errors = 0
                self._run_successes += 1
                return

            self._consecutive_errors += 1
            if (self._consecutive_errors > ERROR_WARNING_THRESHOLD
                    and self._run_successes == 0
                    and not self._warned):
                self._warned = True
                self.event_log.warning(
                    "Too many errors detected. Check the settings or stop the process."
                )
