import requests

from points_core.cycle import describe_error, run_cycle
from points_core.errors import DecodeError, NetworkError, ProtocolError
from points_core.models import CycleFailure, CycleStage, CycleSuccess, RunConfig

from helpers import FakeClient, snapshot

CONFIG = RunConfig(uid="u1", email="a@b.com", device_id="d1", interval=5)


def _messages(event_log):
    return [entry.message for entry in event_log.entries()]


def test_successful_cycle_reports_delta_and_logs_steps_in_order(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(10), snapshot(20)])
    sleeps = []

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=sleeps.append)

    assert isinstance(outcome, CycleSuccess)
    assert outcome.delta == 10
    assert outcome.before.points == 10
    assert outcome.after.points == 20
    assert sleeps == [2.0]
    assert client.calls == [("fetch", "u1"), ("grant", "u1", "a@b.com", "d1"), ("fetch", "u1")]

    messages = _messages(event_log)
    steps = [
        "Fetching user data...",
        "Adding points...",
        "Waiting 2s for points to settle...",
        "Checking updated points...",
        "Points now: 20 (+10)",
    ]
    positions = [messages.index(step) for step in steps]
    assert positions == sorted(positions)
    assert "Current points: 10" in messages
    assert "Points added" in messages


def test_success_updates_stats(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(100), snapshot(150)])

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None)

    assert outcome.delta == 50
    assert (stats.requests, stats.successes, stats.errors) == (1, 1, 0)
    assert stats.last_known_points == 150


def test_no_gain_omits_plus_suffix(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(20), snapshot(20)])

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None)

    assert outcome.delta == 0
    assert _messages(event_log)[-1] == "Points now: 20"


def test_missing_balance_gives_zero_delta(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(None), snapshot(20)])

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None)

    assert isinstance(outcome, CycleSuccess)
    assert outcome.delta == 0
    assert stats.last_known_points == 20


def test_fetch_before_failure_ends_cycle(event_log, stats) -> None:
    client = FakeClient(fetches=[ProtocolError("Error fetching user data: HTTP 500: Error", 500)])

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None)

    assert isinstance(outcome, CycleFailure)
    assert outcome.stage is CycleStage.FETCH_BEFORE
    assert outcome.error_kind == "ProtocolError"
    assert client.calls == [("fetch", "u1")]
    assert (stats.requests, stats.successes, stats.errors) == (1, 0, 1)


def test_mutate_failure_counts_one_error_and_reports_no_delta(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(100)], grant=ProtocolError("Error adding points: HTTP 403", 403))
    sleeps = []

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=sleeps.append)

    assert isinstance(outcome, CycleFailure)
    assert outcome.stage is CycleStage.MUTATE
    assert outcome.before is None
    assert not hasattr(outcome, "delta")
    assert sleeps == []
    assert (stats.successes, stats.errors) == (0, 1)
    errors = [e for e in event_log.entries() if e.severity == "error"]
    assert len(errors) == 1
    assert not any(m.startswith("Points now") for m in _messages(event_log))


def test_fetch_after_failure_keeps_before_snapshot(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(100), DecodeError("bad body")])

    outcome = run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None)

    assert outcome.stage is CycleStage.FETCH_AFTER
    assert outcome.before.points == 100
    assert stats.errors == 1
    assert stats.last_known_points is None


def test_on_account_receives_each_snapshot(event_log, stats) -> None:
    client = FakeClient(fetches=[snapshot(1), snapshot(2)])
    seen = []

    run_cycle(CONFIG, client, event_log, stats, sleep=lambda s: None, on_account=seen.append)

    assert [s.points for s in seen] == [1, 2]


def test_configured_settle_delay_is_used(event_log, stats) -> None:
    config = RunConfig(uid="u1", email="a@b.com", device_id="d1", interval=5, settle_delay=0.25)
    client = FakeClient(fetches=[snapshot(1), snapshot(2)])
    sleeps = []

    run_cycle(config, client, event_log, stats, sleep=sleeps.append)

    assert sleeps == [0.25]


def test_describe_error_translates_connectivity_failures() -> None:
    error = NetworkError("Error fetching user data: connection refused")
    error.__cause__ = requests.ConnectionError("connection refused")

    message = describe_error(error)

    assert message.startswith("Connectivity error.")
    assert "connection refused" in message


def test_describe_error_translates_timeouts() -> None:
    error = NetworkError("Error adding points: read timed out")
    error.__cause__ = requests.Timeout("read timed out")

    assert describe_error(error).startswith("The server took too long to respond.")


def test_describe_error_passes_other_errors_through() -> None:
    assert describe_error(ProtocolError("Error adding points: HTTP 500: Boom", 500)) == \
        "Error adding points: HTTP 500: Boom"
