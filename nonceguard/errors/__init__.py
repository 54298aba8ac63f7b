"""
Error types and error codes for nonceguard.

Absent and expired nonces are routine outcomes and are reported through
return values (``None`` / ``False``), never through these exceptions.
Storage failures live in :mod:`nonceguard.store.types`.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Standard error codes used across nonceguard."""
    CONFIGURATION_ERROR = "configuration_error"
    INVALID_ARGUMENT = "invalid_argument"
    STORAGE_ERROR = "storage_error"
    SERVICE_UNAVAILABLE = "service_unavailable"

    def __str__(self) -> str:
        return self.value


class NonceError(Exception):
    """Base exception for all nonceguard errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ConfigurationError(NonceError, ValueError):
    """Raised when the manager is configured with unusable settings."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details, **kwargs)
        self.field = field


class InvalidArgumentError(NonceError, ValueError):
    """Raised when an operation receives an argument it cannot interpret."""

    def __init__(self, message: str, argument: Optional[str] = None,
                 value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if argument:
            details['argument'] = argument
            details['type'] = type(value).__name__
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, **kwargs)
        self.argument = argument
        self.value = value


__all__ = [
    'ErrorCode',
    'NonceError',
    'ConfigurationError',
    'InvalidArgumentError',
]
