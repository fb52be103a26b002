import pytest

from points_core.event_log import EventLog


def test_append_keeps_order_and_severity(event_log) -> None:
    event_log.info("first")
    event_log.success("second")
    event_log.warning("third")
    event_log.error("fourth")

    entries = event_log.entries()
    assert [e.message for e in entries] == ["first", "second", "third", "fourth"]
    assert [e.severity for e in entries] == ["info", "success", "warning", "error"]
    assert len(entries[0].timestamp) == 8


def test_log_never_exceeds_capacity_and_evicts_oldest(event_log) -> None:
    for i in range(100):
        event_log.info(f"entry {i}")
    assert len(event_log) == 100

    event_log.info("entry 100")

    entries = event_log.entries()
    assert len(entries) == 100
    assert entries[0].message == "entry 1"
    assert entries[-1].message == "entry 100"


def test_clear_empties_and_bumps_revision(event_log) -> None:
    event_log.info("something")
    revision = event_log.revision

    event_log.clear()

    assert event_log.entries() == ()
    assert event_log.revision == revision + 1


def test_unknown_severity_is_rejected(event_log) -> None:
    with pytest.raises(ValueError):
        event_log.append("debug", "nope")
    assert len(event_log) == 0


def test_custom_capacity() -> None:
    small = EventLog(capacity=2)
    for message in ("a", "b", "c"):
        small.info(message)

    assert [e.message for e in small.entries()] == ["b", "c"]
