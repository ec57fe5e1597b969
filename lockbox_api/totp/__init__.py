"""
TOTP Module

Code generation shared with the lockbox firmware.
"""

from .base32 import decode_base32
from .generator import (
    DEFAULT_DIGITS,
    DEFAULT_STEP_SECONDS,
    CodeWindow,
    code_window,
    generate_totp,
)

__all__ = [
    'decode_base32', 'generate_totp', 'code_window', 'CodeWindow',
    'DEFAULT_STEP_SECONDS', 'DEFAULT_DIGITS'
]
