"""
TOTP Generator

Time-based one-time codes compatible with the lockbox firmware:
HMAC-SHA1 with RFC 4226 dynamic truncation, a 60 second step and
4 digit codes.
"""

import hashlib
import hmac
import logging
import struct
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..errors import ComputationError
from .base32 import decode_base32

logger = logging.getLogger(__name__)

DEFAULT_STEP_SECONDS = 60
DEFAULT_DIGITS = 4


@dataclass(frozen=True)
class CodeWindow:
    """Validity window of the code for a given moment."""
    timestamp: int
    counter: int
    seconds_remaining: int
    valid_until: datetime


def _now() -> int:
    return int(time.time())


def _check_parameters(step: int, digits: int):
    if step <= 0:
        raise ComputationError(f"Invalid time step: {step}", details={'step': step})
    if digits <= 0:
        raise ComputationError(f"Invalid digit count: {digits}", details={'digits': digits})


def time_counter(timestamp: int, step: int = DEFAULT_STEP_SECONDS) -> int:
    """Number of whole steps since the Unix epoch."""
    return int(timestamp) // step


def truncate(digest: bytes, digits: int = DEFAULT_DIGITS) -> str:
    """
    Apply RFC 4226 dynamic truncation to an HMAC digest.

    Args:
        digest: 20 byte HMAC-SHA1 output
        digits: Length of the resulting code

    Returns:
        Zero-padded decimal code
    """
    offset = digest[-1] & 0x0F
    code = ((digest[offset] & 0x7F) << 24 |
            digest[offset + 1] << 16 |
            digest[offset + 2] << 8 |
            digest[offset + 3])
    return str(code % (10 ** digits)).zfill(digits)


def generate_totp(
    secret: str,
    timestamp: Optional[int] = None,
    step: int = DEFAULT_STEP_SECONDS,
    digits: int = DEFAULT_DIGITS
) -> str:
    """
    Generate the code for a Base32 secret.

    Args:
        secret: Base32 encoded shared secret
        timestamp: Unix time in seconds (defaults to now)
        step: Time step in seconds
        digits: Code length

    Returns:
        Code string of exactly ``digits`` characters

    Raises:
        ComputationError: If the parameters are invalid or HMAC fails
    """
    _check_parameters(step, digits)

    if timestamp is None:
        timestamp = _now()

    key = decode_base32(secret)
    counter = time_counter(timestamp, step)

    try:
        message = struct.pack('>Q', counter)
        digest = hmac.new(key, message, hashlib.sha1).digest()
    except (struct.error, TypeError, ValueError) as e:
        logger.error(f"HMAC computation failed for counter {counter}: {e}")
        raise ComputationError(
            "Failed to generate TOTP code",
            details={'reason': str(e)}
        ) from e

    return truncate(digest, digits)


def code_window(timestamp: Optional[int] = None, step: int = DEFAULT_STEP_SECONDS) -> CodeWindow:
    """
    Describe how long the code for ``timestamp`` stays valid.

    Args:
        timestamp: Unix time in seconds (defaults to now)
        step: Time step in seconds

    Returns:
        CodeWindow with remaining seconds and the end of the step
    """
    _check_parameters(step, DEFAULT_DIGITS)

    if timestamp is None:
        timestamp = _now()

    timestamp = int(timestamp)
    remaining = step - (timestamp % step)

    return CodeWindow(
        timestamp=timestamp,
        counter=time_counter(timestamp, step),
        seconds_remaining=remaining,
        valid_until=datetime.fromtimestamp(timestamp + remaining, tz=timezone.utc)
    )
