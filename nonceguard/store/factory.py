"""
Factory for creating storage backends.
Provides a centralized way to create and configure nonce storage.
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass

from .types import StorageEngine
from .memory import MemoryStorage
from .session import SessionStorage
from .redis_store import RedisStorage


@dataclass
class StorageConfig:
    """Configuration for storage backends."""
    store_type: str = "memory"
    redis_url: Optional[str] = None
    key_prefix: Optional[str] = None
    session: Optional[Any] = None
    namespace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'store_type': self.store_type,
            'redis_url': self.redis_url,
            'key_prefix': self.key_prefix,
            'namespace': self.namespace
        }

    def backend_kwargs(self) -> Dict[str, Any]:
        """Constructor arguments for the configured backend type."""
        store_type = self.store_type.lower()
        kwargs: Dict[str, Any] = {}

        if store_type == 'redis':
            if self.redis_url:
                kwargs['url'] = self.redis_url
            if self.key_prefix is not None:
                kwargs['key_prefix'] = self.key_prefix
        elif store_type == 'session':
            kwargs['session'] = self.session
            if self.namespace:
                kwargs['namespace'] = self.namespace

        return kwargs


# Registry of available storage implementations
_STORAGE_IMPLEMENTATIONS: Dict[str, Callable[..., StorageEngine]] = {
    'memory': MemoryStorage,
    'session': SessionStorage,
    'redis': RedisStorage,
}


class StorageFactory:
    """Factory for creating storage backends."""

    @staticmethod
    def create_store(store_type: str, config: Optional[Dict[str, Any]] = None) -> StorageEngine:
        """
        Create a storage backend.

        Args:
            store_type: Type of storage ('memory', 'session', 'redis', ...)
            config: Constructor arguments for the backend

        Returns:
            StorageEngine instance

        Raises:
            ValueError: If store_type is not supported
        """
        if config is None:
            config = {}

        implementation = _STORAGE_IMPLEMENTATIONS.get(store_type.lower())
        if not implementation:
            raise ValueError(f"Unsupported storage type: {store_type}")

        return implementation(**config)

    @staticmethod
    def register_implementation(name: str,
                                implementation: Callable[..., StorageEngine]) -> None:
        """
        Register a new storage implementation.

        Args:
            name: Name to register the implementation under
            implementation: StorageEngine class or factory callable
        """
        _STORAGE_IMPLEMENTATIONS[name.lower()] = implementation

    @staticmethod
    def get_available_types() -> list:
        """Get list of available storage types."""
        return list(_STORAGE_IMPLEMENTATIONS.keys())


def create_memory_store() -> MemoryStorage:
    """Create a memory-based storage backend."""
    return MemoryStorage()


def create_storage(config: StorageConfig) -> StorageEngine:
    """
    Create a storage backend from configuration.

    Args:
        config: Storage configuration

    Returns:
        StorageEngine instance
    """
    return StorageFactory.create_store(config.store_type, config.backend_kwargs())
