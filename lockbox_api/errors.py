"""
Error Types

Exceptions raised by the TOTP engine and the heartbeat tracker.
The HTTP layer maps them onto client and server error responses.
"""

from typing import Any, Dict, Optional


class LockboxError(Exception):
    """
    Base exception for lockbox API errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: str = "LOCKBOX_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            'error': self.code,
            'message': self.message,
            'details': self.details,
        }


class ValidationError(LockboxError):
    """Raised when a required identifier or secret is missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ComputationError(LockboxError):
    """Raised when code generation fails (bad parameters, HMAC failure)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="COMPUTATION_ERROR", details=details)
