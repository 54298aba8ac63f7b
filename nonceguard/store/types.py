"""
Storage contract for nonceguard.

A backend is a plain keyed container. It stores whatever the manager
hands it and knows nothing about expiry.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageEngine(ABC):
    """
    Abstract base class for nonce storage backends.

    The manager only calls ``get`` after ``has`` returned True for the
    same name, so backends may treat ``get`` on a missing name as
    undefined. The two calls are not atomic: a concurrent ``delete`` or
    ``set`` in between is a known race that this contract cannot close.
    """

    @abstractmethod
    def get(self, name: str) -> Any:
        """
        Return the value stored under ``name``.

        Args:
            name: Storage index

        Returns:
            The stored value
        """
        pass

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        """
        Store ``value`` under ``name``, replacing any prior value.

        Args:
            name: Storage index
            value: Value to store
        """
        pass

    @abstractmethod
    def has(self, name: str) -> bool:
        """
        Check whether a value is stored under ``name``.

        Args:
            name: Storage index

        Returns:
            True if a value exists, False otherwise
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Remove the value stored under ``name``. No-op if absent.

        Args:
            name: Storage index
        """
        pass


class StorageError(Exception):
    """Base class for storage-related errors."""

    def __init__(self, operation: str, key: str = "", message: str = "",
                 cause: Optional[Exception] = None):
        self.operation = operation
        self.key = key
        self.message = message
        self.cause = cause
        super().__init__(f"Storage error in {operation}: {message}")


class StorageUnavailableError(StorageError):
    """Raised when a backend cannot be initialised or reached."""
    pass
