"""
Package store provides the storage contract and backends for nonceguard.

This package implements:
- The StorageEngine contract consumed by the nonce manager
- Memory-based storage for development/testing
- Session-based storage for per-user web sessions
- Redis-based storage for multi-process deployments
- Storage factory and configuration
"""

from .types import (
    StorageEngine,
    StorageError,
    StorageUnavailableError
)

from .memory import MemoryStorage
from .session import SessionStorage
from .redis_store import RedisStorage

from .factory import (
    StorageConfig,
    StorageFactory,
    create_memory_store,
    create_storage
)

__all__ = [
    # Contract
    'StorageEngine',
    'StorageError',
    'StorageUnavailableError',

    # Implementations
    'MemoryStorage',
    'SessionStorage',
    'RedisStorage',

    # Factory
    'StorageConfig',
    'StorageFactory',
    'create_memory_store',
    'create_storage'
]
