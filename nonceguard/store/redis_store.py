"""
Redis storage backend for nonceguard.

Suitable for deployments where several processes must share nonces.
Keys are written without a TTL: expired records stay until they are
deleted or overwritten, exactly as with every other backend.
"""

import logging
from typing import Any, Callable, Optional

import redis

from ..core.types import NonceRecord
from .types import StorageEngine, StorageError, StorageUnavailableError


logger = logging.getLogger(__name__)


class RedisStorage(StorageEngine):
    """
    Redis-based storage backend.

    Values are serialised to strings before they reach Redis; by default
    they are expected to be :class:`NonceRecord` instances.
    """

    def __init__(self,
                 client: Optional[redis.Redis] = None,
                 url: str = "redis://localhost:6379/0",
                 key_prefix: str = "nonceguard:",
                 serializer: Callable[[Any], str] = NonceRecord.to_json,
                 deserializer: Callable[[Any], Any] = NonceRecord.from_json,
                 **connection_kwargs):
        """
        Initialize Redis storage.

        Args:
            client: Existing Redis client; one is built from ``url`` if omitted
            url: Redis connection URL
            key_prefix: Prefix for every key written
            serializer: Converts a stored value to a string
            deserializer: Converts a string back to the stored value
            **connection_kwargs: Passed to ``redis.Redis.from_url``
        """
        self.key_prefix = key_prefix
        self._serializer = serializer
        self._deserializer = deserializer

        if client is None:
            try:
                client = redis.Redis.from_url(url, **connection_kwargs)
            except (ValueError, redis.RedisError) as e:
                raise StorageUnavailableError("connect", "", f"Invalid Redis configuration: {e}", e)
            logger.info(f"Configured Redis storage at {url}")

        self._redis = client

    def _get_key(self, name: str) -> str:
        """Get Redis key for a nonce name."""
        return f"{self.key_prefix}{name}"

    def _call(self, operation: str, name: str, func: Callable, *args):
        try:
            return func(*args)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.error(f"Redis unavailable during {operation}: {e}")
            raise StorageUnavailableError(operation, name, "Redis is unavailable", e)
        except redis.RedisError as e:
            logger.error(f"Redis {operation} failed: {e}")
            raise StorageError(operation, name, str(e), e)

    def get(self, name: str) -> Any:
        """Return the stored value."""
        raw = self._call("get", name, self._redis.get, self._get_key(name))
        if raw is None:
            raise KeyError(name)
        return self._deserializer(raw)

    def set(self, name: str, value: Any) -> None:
        """Store a value, replacing any prior one."""
        self._call("set", name, self._redis.set, self._get_key(name), self._serializer(value))

    def has(self, name: str) -> bool:
        """Check if a value is stored."""
        return bool(self._call("has", name, self._redis.exists, self._get_key(name)))

    def delete(self, name: str) -> None:
        """Remove a value if present."""
        self._call("delete", name, self._redis.delete, self._get_key(name))

    def ping(self) -> bool:
        """Check connectivity to Redis."""
        return bool(self._call("ping", "", self._redis.ping))

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._redis.close()
        logger.info("Closed Redis storage")
