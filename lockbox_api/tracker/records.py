"""
Heartbeat Records

Stored lockbox state, computed status views and the policies that
build them.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Any, Optional

# A lockbox is online if its last heartbeat arrived within this window
LIVENESS_WINDOW_MS = 15 * 60 * 1000

# Device clocks within this distance of ours count as synchronized
SKEW_TOLERANCE_SECONDS = 300

NEVER_CONNECTED = 'never_connected'


@dataclass(frozen=True)
class HeartbeatDefaults:
    """Values applied to fields a heartbeat leaves out."""
    status: str = 'unknown'
    lock_open: bool = False

    def resolve_status(self, status: Optional[str]) -> str:
        return status or self.status

    def resolve_lock_open(self, lock_open: Optional[bool]) -> bool:
        return bool(lock_open) if lock_open is not None else self.lock_open

    def resolve_timestamp(self, reported: Optional[int], received_at: float) -> int:
        """Devices that omit their clock reading get our receipt time."""
        return int(reported) if reported is not None else int(received_at)


@dataclass(frozen=True)
class HeartbeatRecord:
    """Latest known state of a lockbox."""
    lockbox_id: str
    status: str
    lock_open: bool
    reported_timestamp: int
    received_at: float
    received_at_iso: str
    time_sync: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StatusView:
    """Online/offline view of a lockbox computed at query time."""
    lockbox_id: str
    is_online: bool
    status: str
    lock_open: bool
    message: str
    timestamp: Optional[int] = None
    last_seen: Optional[str] = None
    minutes_ago: Optional[int] = None
    elapsed_ms: Optional[int] = None

    @property
    def never_connected(self) -> bool:
        return self.status == NEVER_CONNECTED and self.last_seen is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def format_iso(seconds: float) -> str:
    """Render wall-clock seconds as an ISO-8601 UTC string."""
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def classify_skew(reported_timestamp: int, now: float) -> str:
    """
    Compare a device clock reading with ours.

    Args:
        reported_timestamp: Device clock in Unix seconds
        now: Our clock in Unix seconds

    Returns:
        'synchronized' or a warning with the difference in seconds
    """
    difference = int(abs(now - reported_timestamp))
    if difference <= SKEW_TOLERANCE_SECONDS:
        return 'synchronized'
    return f"warning: {difference}s time difference"


def never_connected_view(lockbox_id: str) -> StatusView:
    """View for a lockbox that has not sent a heartbeat yet."""
    return StatusView(
        lockbox_id=lockbox_id,
        is_online=False,
        status=NEVER_CONNECTED,
        lock_open=False,
        message='No heartbeat data available for this lockbox'
    )


def status_view(record: HeartbeatRecord, now: float) -> StatusView:
    """
    Compute the online/offline view of a stored record.

    Args:
        record: Latest heartbeat record
        now: Current wall-clock seconds

    Returns:
        StatusView with liveness and a readable message
    """
    elapsed_ms = max(0, int((now - record.received_at) * 1000))
    is_online = elapsed_ms < LIVENESS_WINDOW_MS
    minutes_ago = elapsed_ms // 60000
    state = 'online' if is_online else 'offline'

    return StatusView(
        lockbox_id=record.lockbox_id,
        is_online=is_online,
        status=record.status,
        lock_open=record.lock_open,
        message=f"Lockbox is {state} (last seen {minutes_ago} minutes ago)",
        timestamp=record.reported_timestamp,
        last_seen=record.received_at_iso,
        minutes_ago=minutes_ago,
        elapsed_ms=elapsed_ms
    )
