"""
nonceguard Python Package

Named, expiring one-time tokens for cross-site request forgery protection.
"""

__version__ = "0.1.0"

from .core.nonce import NonceManager
from .core.config import NonceConfig
from .core.types import (
    Clock,
    SystemClock,
    ManualClock,
    NonceRecord,
)
from .errors import (
    NonceError,
    ConfigurationError,
    InvalidArgumentError,
)
from .store import (
    StorageEngine,
    StorageError,
    StorageUnavailableError,
    MemoryStorage,
    SessionStorage,
    RedisStorage,
    StorageConfig,
)
from .token.generator import DEFAULT_CHARSET, TokenGenerator

__all__ = [
    "NonceManager",
    "NonceConfig",
    "Clock",
    "SystemClock",
    "ManualClock",
    "NonceRecord",
    "NonceError",
    "ConfigurationError",
    "InvalidArgumentError",
    "StorageEngine",
    "StorageError",
    "StorageUnavailableError",
    "MemoryStorage",
    "SessionStorage",
    "RedisStorage",
    "StorageConfig",
    "DEFAULT_CHARSET",
    "TokenGenerator",
]
