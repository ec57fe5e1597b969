"""
Heartbeat Tracker

Keeps the latest heartbeat of every lockbox in memory and answers
online/offline queries. State is volatile and lost on restart.
"""

import logging
import threading
import time
from typing import Callable, Dict, Any, Optional, Protocol

from ..errors import ValidationError
from .records import (
    HeartbeatDefaults,
    HeartbeatRecord,
    StatusView,
    classify_skew,
    format_iso,
    never_connected_view,
    status_view,
)

logger = logging.getLogger(__name__)


class TrackerObserver(Protocol):
    """Hooks called by the tracker after each operation."""

    def on_ingest(self, record: HeartbeatRecord) -> None: ...

    def on_query(self, lockbox_id: str, view: StatusView) -> None: ...

    def on_validation_failure(self, operation: str, reason: str) -> None: ...


class LoggingObserver:
    """Default observer writing tracker activity to the log."""

    def on_ingest(self, record: HeartbeatRecord) -> None:
        logger.debug(
            f"Heartbeat from {record.lockbox_id}: status={record.status} "
            f"lock_open={record.lock_open} timestamp={record.reported_timestamp}"
        )
        if record.time_sync and record.time_sync != 'synchronized':
            logger.info(f"Clock skew for {record.lockbox_id}: {record.time_sync}")

    def on_query(self, lockbox_id: str, view: StatusView) -> None:
        logger.debug(
            f"Status query for {lockbox_id}: online={view.is_online} "
            f"minutes_ago={view.minutes_ago}"
        )

    def on_validation_failure(self, operation: str, reason: str) -> None:
        logger.warning(f"Rejected {operation}: {reason}")


class HeartbeatTracker:
    """
    In-memory store of lockbox heartbeats.

    One record per lockbox id, replaced on every heartbeat. Liveness is
    recomputed on each query from the receipt time of the last heartbeat.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        defaults: Optional[HeartbeatDefaults] = None,
        observer: Optional[TrackerObserver] = None
    ):
        self._clock = clock
        self._defaults = defaults or HeartbeatDefaults()
        self._observer = observer or LoggingObserver()

        # lockbox_id -> HeartbeatRecord
        self._records: Dict[str, HeartbeatRecord] = {}
        self._lock = threading.Lock()

    def _require_id(self, operation: str, lockbox_id: Optional[str]) -> str:
        if not lockbox_id:
            reason = "Missing required field: lockboxId"
            self._observer.on_validation_failure(operation, reason)
            raise ValidationError(reason, details={'field': 'lockboxId'})
        return lockbox_id

    def ingest(
        self,
        lockbox_id: Optional[str],
        status: Optional[str] = None,
        lock_open: Optional[bool] = None,
        reported_timestamp: Optional[int] = None
    ) -> HeartbeatRecord:
        """
        Store a heartbeat, replacing any previous one for the lockbox.

        Args:
            lockbox_id: Lockbox identifier
            status: Free-form status reported by the device
            lock_open: Whether the lock is open
            reported_timestamp: Device clock in Unix seconds

        Returns:
            The stored record

        Raises:
            ValidationError: If lockbox_id is missing or empty
        """
        lockbox_id = self._require_id('ingest', lockbox_id)
        now = self._clock()

        record = HeartbeatRecord(
            lockbox_id=lockbox_id,
            status=self._defaults.resolve_status(status),
            lock_open=self._defaults.resolve_lock_open(lock_open),
            reported_timestamp=self._defaults.resolve_timestamp(reported_timestamp, now),
            received_at=now,
            received_at_iso=format_iso(now),
            time_sync=classify_skew(reported_timestamp, now) if reported_timestamp is not None else None
        )

        with self._lock:
            self._records[lockbox_id] = record

        self._observer.on_ingest(record)
        return record

    def query(self, lockbox_id: Optional[str]) -> StatusView:
        """
        Get the online/offline view of a lockbox.

        Args:
            lockbox_id: Lockbox identifier

        Returns:
            StatusView, a "never connected" view if no heartbeat was seen

        Raises:
            ValidationError: If lockbox_id is missing or empty
        """
        lockbox_id = self._require_id('query', lockbox_id)

        with self._lock:
            record = self._records.get(lockbox_id)

        if record is None:
            view = never_connected_view(lockbox_id)
        else:
            view = status_view(record, self._clock())

        self._observer.on_query(lockbox_id, view)
        return view

    def get_record(self, lockbox_id: str) -> Optional[HeartbeatRecord]:
        """Get the stored record of a lockbox, if any."""
        with self._lock:
            return self._records.get(lockbox_id)

    def snapshot(self) -> Dict[str, HeartbeatRecord]:
        """Copy of all stored records."""
        with self._lock:
            return dict(self._records)

    def reset(self):
        """Forget every lockbox."""
        with self._lock:
            self._records.clear()
        logger.info("Heartbeat tracker reset")

    def get_stats(self) -> Dict[str, Any]:
        """Get tracker statistics."""
        records = self.snapshot()
        now = self._clock()
        online = sum(1 for record in records.values() if status_view(record, now).is_online)

        return {
            'tracked_lockboxes': len(records),
            'online_lockboxes': online,
            'lockbox_ids': list(records.keys())
        }
