"""
Session-backed storage for nonceguard.

Keeps nonces inside a web framework's per-user session (Flask's
``session``, Starlette's ``request.session`` or any mutable mapping)
under a single namespace key. The namespace is created lazily on the
first call that needs it.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Optional, Union

from .types import StorageEngine, StorageUnavailableError


logger = logging.getLogger(__name__)

SessionProvider = Union[MutableMapping, Callable[[], MutableMapping]]


class SessionStorage(StorageEngine):
    """
    Storage backend living in a session mapping.

    ``session`` may be the mapping itself or a zero-argument callable
    returning the current session, which is what request-scoped session
    proxies need. Cookie-based sessions only hold JSON-friendly data, so
    pass ``serializer``/``deserializer`` (e.g. ``NonceRecord.to_dict`` and
    ``NonceRecord.from_dict``) for those.
    """

    def __init__(self, session: SessionProvider, namespace: str = "nonces",
                 serializer: Optional[Callable[[Any], Any]] = None,
                 deserializer: Optional[Callable[[Any], Any]] = None):
        if not namespace:
            raise ValueError("namespace must not be empty")
        self._provider = session
        self.namespace = namespace
        self._serializer = serializer
        self._deserializer = deserializer

    def _session(self) -> MutableMapping:
        session = self._provider
        if callable(session) and not isinstance(session, MutableMapping):
            try:
                session = session()
            except Exception as e:
                logger.error(f"Session provider failed: {e}")
                raise StorageUnavailableError(
                    "session", "", "Session provider raised while fetching the session", e
                )

        if session is None:
            raise StorageUnavailableError(
                "session", "", "No session is available; sessions are disabled or not started"
            )
        if not isinstance(session, MutableMapping):
            raise StorageUnavailableError(
                "session", "", f"Session must be a mutable mapping, got {type(session).__name__}"
            )
        return session

    def _nonces(self) -> MutableMapping:
        session = self._session()
        if self.namespace not in session:
            session[self.namespace] = {}
            logger.debug(f"Initialised session namespace '{self.namespace}'")
        return session[self.namespace]

    def _mark_modified(self) -> None:
        # Nested mutations are invisible to Flask-style sessions otherwise.
        session = self._session()
        if hasattr(session, "modified"):
            session.modified = True

    def get(self, name: str) -> Any:
        """Return the stored value."""
        value = self._nonces()[name]
        return self._deserializer(value) if self._deserializer else value

    def set(self, name: str, value: Any) -> None:
        """Store a value, replacing any prior one."""
        if self._serializer:
            value = self._serializer(value)
        self._nonces()[name] = value
        self._mark_modified()

    def has(self, name: str) -> bool:
        """Check if a value is stored."""
        return name in self._nonces()

    def delete(self, name: str) -> None:
        """Remove a value if present."""
        nonces = self._nonces()
        if name in nonces:
            del nonces[name]
            self._mark_modified()
