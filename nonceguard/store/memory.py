"""
In-memory storage backend for nonceguard.
Provides a process-local backend for development, testing and
single-instance deployments.
"""

import logging
import threading
from typing import Any, Dict

from .types import StorageEngine


logger = logging.getLogger(__name__)


class MemoryStorage(StorageEngine):
    """
    In-memory storage backend.

    Each individual call is guarded by a lock; sequences of calls are not.

    Note: All data is lost when the process terminates.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def get(self, name: str) -> Any:
        """Return the stored value."""
        with self._lock:
            return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """Store a value, replacing any prior one."""
        with self._lock:
            self._values[name] = value

    def has(self, name: str) -> bool:
        """Check if a value is stored."""
        with self._lock:
            return name in self._values

    def delete(self, name: str) -> None:
        """Remove a value if present."""
        with self._lock:
            self._values.pop(name, None)

    # Memory-specific methods
    def clear_all(self) -> None:
        """Clear all stored values. Useful for testing."""
        with self._lock:
            count = len(self._values)
            self._values.clear()
        logger.debug(f"Cleared {count} entries from memory storage")

    def get_count(self) -> int:
        """Get the current number of stored entries."""
        with self._lock:
            return len(self._values)
