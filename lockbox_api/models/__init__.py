"""
Models Package

Request and response models for the HTTP API.
"""

from .heartbeat import HeartbeatRequest, HeartbeatResponse, LockboxStatusResponse
from .totp import TotpRequest, TotpResponse

__all__ = [
    'HeartbeatRequest', 'HeartbeatResponse', 'LockboxStatusResponse',
    'TotpRequest', 'TotpResponse'
]
