"""
Tracker Module

Heartbeat ingestion and lockbox liveness.
"""

from .records import (
    LIVENESS_WINDOW_MS,
    SKEW_TOLERANCE_SECONDS,
    HeartbeatDefaults,
    HeartbeatRecord,
    StatusView,
    classify_skew,
)
from .tracker import HeartbeatTracker, LoggingObserver, TrackerObserver

__all__ = [
    'HeartbeatTracker', 'LoggingObserver', 'TrackerObserver',
    'HeartbeatDefaults', 'HeartbeatRecord', 'StatusView', 'classify_skew',
    'LIVENESS_WINDOW_MS', 'SKEW_TOLERANCE_SECONDS'
]
