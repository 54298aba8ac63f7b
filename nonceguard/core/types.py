"""
Core types for nonceguard.

Defines the record persisted per nonce name and the clock abstraction
used for every expiry and salt-rotation decision.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Protocol, Union


class Clock(Protocol):
    """Provides the current time. Implementations must return aware UTC datetimes."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock:
    """
    Clock that only moves when told to.

    Lets tests simulate "30 seconds later" without sleeping.
    """

    def __init__(self, start: Optional[datetime] = None):
        if start is None:
            start = datetime.now(timezone.utc)
        elif start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: Union[int, float, timedelta]) -> datetime:
        """
        Move the clock forward.

        Args:
            delta: Seconds or a timedelta. Negative values move it back.

        Returns:
            The new current time
        """
        if not isinstance(delta, timedelta):
            delta = timedelta(seconds=delta)
        self._now += delta
        return self._now

    def set(self, moment: datetime) -> None:
        """Jump to an absolute instant."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        self._now = moment


@dataclass(frozen=True)
class NonceRecord:
    """The unit stored per nonce name."""
    value: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check whether the record has expired at ``now``."""
        return now >= self.expires_at

    def time_until_expiry(self, now: datetime) -> timedelta:
        """Get time left until expiry (negative once expired)."""
        return self.expires_at - now

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'value': self.value,
            'expires_at': self.expires_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NonceRecord':
        """Create from dictionary representation."""
        expires_at = data['expires_at']
        if isinstance(expires_at, str):
            expires_at = datetime.fromisoformat(expires_at)
        return cls(value=data['value'], expires_at=expires_at)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: Union[str, bytes]) -> 'NonceRecord':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))
