"""
One update cycle: read → grant → settle → re-read → diff.

A failing step ends the cycle; nothing is retried within it (a repeated
grant may credit the account twice).
"""

import time

import requests

from .errors import RemoteError, NetworkError
from .models import CycleStage, CycleSuccess, CycleFailure


def describe_error(exc):
    """Operator-facing text for a failure, keeping the raw detail."""
    cause = exc.__cause__ if isinstance(exc, NetworkError) else None
    if isinstance(cause, requests.exceptions.SSLError):
        return f"Secure connection failed. Check the server certificate. ({exc})"
    if isinstance(cause, requests.exceptions.Timeout):
        return f"The server took too long to respond. ({exc})"
    if isinstance(cause, requests.exceptions.ConnectionError):
        return f"Connectivity error. Check your internet connection. ({exc})"
    return str(exc) or exc.__class__.__name__


def _fail(stage, exc, event_log, stats, before=None):
    stats.record_error()
    message = describe_error(exc)
    event_log.error(message)
    return CycleFailure(stage=stage, error_kind=exc.__class__.__name__,
                        message=message, before=before)


def _points_delta(before, after):
    if before is None or after is None:
        return 0
    if before.points is None or after.points is None:
        return 0
    return after.points - before.points


def run_cycle(config, client, event_log, stats, sleep=time.sleep, on_account=None):
    """
    Execute one cycle for `config` and return its CycleOutcome.

    `on_account` is called with every snapshot read, so a presentation
    layer can show the latest account state.
    """
    stats.record_attempt()

    # 1. Current balance
    event_log.info("Fetching user data...")
    try:
        before = client.fetch_account(config.uid)
    except RemoteError as e:
        return _fail(CycleStage.FETCH_BEFORE, e, event_log, stats)
    if before.points is not None:
        event_log.success(f"Current points: {before.points}")
    if on_account:
        on_account(before)

    # 2. Grant
    event_log.info("Adding points...")
    try:
        result = client.grant_points(config.uid, config.email, config.device_id)
    except RemoteError as e:
        return _fail(CycleStage.MUTATE, e, event_log, stats)
    if result.get("message"):
        event_log.success(str(result["message"]))

    # 3. Settle: the server credits points asynchronously
    event_log.info(f"Waiting {config.settle_delay:g}s for points to settle...")
    sleep(config.settle_delay)

    # 4. Updated balance
    event_log.info("Checking updated points...")
    try:
        after = client.fetch_account(config.uid)
    except RemoteError as e:
        return _fail(CycleStage.FETCH_AFTER, e, event_log, stats, before=before)
    if on_account:
        on_account(after)

    # 5. Diff
    delta = _points_delta(before, after)
    if after.points is not None:
        gain = f" (+{delta})" if delta > 0 else ""
        event_log.success(f"Points now: {after.points}{gain}")
    stats.record_success(after.points)
    return CycleSuccess(before=before, after=after, delta=delta)
