"""Shared fixtures for lockbox API tests."""

import pytest
from fastapi.testclient import TestClient

from lockbox_api.config import Settings
from lockbox_api.main import create_app
from lockbox_api.tracker import HeartbeatTracker

START_TIME = 1700000000.0


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingObserver:
    """Observer that keeps every call for assertions."""

    def __init__(self):
        self.ingested = []
        self.queried = []
        self.failures = []

    def on_ingest(self, record):
        self.ingested.append(record)

    def on_query(self, lockbox_id, view):
        self.queried.append((lockbox_id, view))

    def on_validation_failure(self, operation, reason):
        self.failures.append((operation, reason))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def tracker(clock, observer) -> HeartbeatTracker:
    return HeartbeatTracker(clock=clock, observer=observer)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def client(settings):
    """Test client with a fresh app and a fake-clock tracker."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        test_client.clock = FakeClock()
        app.state.tracker = HeartbeatTracker(clock=test_client.clock)
        yield test_client


@pytest.fixture
def debug_client():
    """Test client with debug payloads enabled."""
    app = create_app(Settings(_env_file=None, debug_payloads=True))
    with TestClient(app) as test_client:
        yield test_client
