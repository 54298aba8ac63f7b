"""
Core nonce lifecycle components.
"""

from .types import Clock, SystemClock, ManualClock, NonceRecord
from .config import NonceConfig, MIN_SECRET_LENGTH, DEFAULT_EXPIRY, DEFAULT_LENGTH
from .nonce import NonceManager

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
    "NonceRecord",
    "NonceConfig",
    "MIN_SECRET_LENGTH",
    "DEFAULT_EXPIRY",
    "DEFAULT_LENGTH",
    "NonceManager",
]
