"""
Heartbeat Models

Pydantic models for lockbox heartbeats and status responses.
Field aliases match the names sent by the lockbox firmware.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

from ..tracker import HeartbeatRecord, StatusView


class HeartbeatRequest(BaseModel):
    """Heartbeat posted by a lockbox."""
    lockbox_id: Optional[str] = Field(None, alias='lockboxId')
    status: Optional[str] = None
    lock_open: Optional[bool] = Field(None, alias='lockOpen')
    timestamp: Optional[int] = Field(None, description="Device clock in Unix seconds")

    class Config:
        populate_by_name = True


class HeartbeatResponse(BaseModel):
    """Acknowledgement of a stored heartbeat."""
    success: bool
    message: str
    lockbox_id: str = Field(..., alias='lockboxId')
    time_sync: Optional[str] = Field(None, alias='timeSync')
    debug: Optional[Dict[str, Any]] = None

    class Config:
        populate_by_name = True

    @classmethod
    def from_record(cls, record: HeartbeatRecord, debug: bool = False) -> 'HeartbeatResponse':
        fields = {
            'success': True,
            'message': 'Heartbeat received successfully',
            'lockbox_id': record.lockbox_id,
        }
        if record.time_sync is not None:
            fields['time_sync'] = record.time_sync
        if debug:
            fields['debug'] = {'storedData': record.to_dict()}
        return cls(**fields)


class LockboxStatusResponse(BaseModel):
    """Online/offline status of a lockbox."""
    lockbox_id: str = Field(..., alias='lockboxId')
    is_online: bool = Field(..., alias='isOnline')
    status: str
    lock_open: bool = Field(..., alias='lockOpen')
    timestamp: Optional[int] = None
    last_seen: Optional[str] = Field(None, alias='lastSeen')
    minutes_ago: Optional[int] = Field(None, alias='minutesAgo')
    message: str
    debug: Optional[Dict[str, Any]] = None

    class Config:
        populate_by_name = True

    @classmethod
    def from_view(
        cls,
        view: StatusView,
        debug: Optional[Dict[str, Any]] = None
    ) -> 'LockboxStatusResponse':
        fields = {
            'lockbox_id': view.lockbox_id,
            'is_online': view.is_online,
            'status': view.status,
            'lock_open': view.lock_open,
            'last_seen': view.last_seen,
            'message': view.message,
        }
        # A lockbox that never connected has no clock reading or age
        if not view.never_connected:
            fields['timestamp'] = view.timestamp
            fields['minutes_ago'] = view.minutes_ago
        if debug is not None:
            fields['debug'] = debug
        return cls(**fields)
