import pytest

from points_core.event_log import EventLog
from points_core.state import Stats

from helpers import ManualScheduler


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def stats():
    return Stats()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def valid_settings():
    return {"uid": "u1", "email": "a@b.com", "deviceId": "d1", "interval": 5}
