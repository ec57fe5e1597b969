"""
Lockbox Status Routes

Heartbeats from lockboxes (POST) and status checks from dashboards (GET).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request

from ..errors import ValidationError
from ..models.heartbeat import HeartbeatRequest, HeartbeatResponse, LockboxStatusResponse
from ..tracker import LIVENESS_WINDOW_MS, HeartbeatTracker

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_EXAMPLE = '/api/lockbox-status?lockboxId=0001'


def get_tracker(request: Request) -> HeartbeatTracker:
    return request.app.state.tracker


@router.post(
    "/lockbox-status",
    response_model=HeartbeatResponse,
    response_model_exclude_unset=True
)
async def receive_heartbeat(request: Request, data: HeartbeatRequest):
    """Store a heartbeat sent by a lockbox."""
    record = get_tracker(request).ingest(
        data.lockbox_id,
        status=data.status,
        lock_open=data.lock_open,
        reported_timestamp=data.timestamp
    )

    logger.info(f"Heartbeat received from {record.lockbox_id}")

    return HeartbeatResponse.from_record(
        record,
        debug=request.app.state.settings.debug_payloads
    )


@router.get(
    "/lockbox-status",
    response_model=LockboxStatusResponse,
    response_model_exclude_unset=True
)
async def get_lockbox_status(
    request: Request,
    lockbox_id: Optional[str] = Query(None, alias="lockboxId")
):
    """Report whether a lockbox is online and its last known state."""
    tracker = get_tracker(request)

    try:
        view = tracker.query(lockbox_id)
    except ValidationError as e:
        e.details['example'] = STATUS_EXAMPLE
        raise

    debug = None
    if request.app.state.settings.debug_payloads:
        record = tracker.get_record(view.lockbox_id)
        debug = {
            'timeSinceLastSeen': view.elapsed_ms,
            'threshold': LIVENESS_WINDOW_MS,
            'storedData': record.to_dict() if record else None
        }

    return LockboxStatusResponse.from_view(view, debug=debug)
