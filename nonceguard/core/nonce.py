"""
Nonce lifecycle management for nonceguard.

The manager issues named, expiring one-time tokens, keeps them in an
injected storage backend and checks submitted values against them.
It holds no state of its own beyond its configuration.

Concurrency note: ``get`` and ``verify`` read the backend in two steps
(``has`` then ``get``). Nothing makes that sequence atomic, so a
concurrent ``create`` or ``delete`` of the same name in between can
race. Closing that gap needs a backend with check-and-act primitives.
"""

import hmac
import logging
import math
from datetime import timedelta
from typing import Any, Optional, Union

from ..errors import ConfigurationError, InvalidArgumentError
from ..store.factory import create_storage
from ..store.types import StorageEngine
from ..token.generator import DEFAULT_CHARSET, TokenGenerator
from .config import DEFAULT_EXPIRY, DEFAULT_LENGTH, MIN_SECRET_LENGTH, NonceConfig
from .types import Clock, NonceRecord, SystemClock


logger = logging.getLogger(__name__)

Numeric = Union[int, float, str]


def _coerce_int(value: Any, argument: str) -> int:
    """Interpret ``value`` as an integer the way a form field would be read."""
    if isinstance(value, timedelta) and argument == "expiry":
        return int(value.total_seconds())
    if isinstance(value, bool):
        raise InvalidArgumentError(
            f"{argument} expected an integer, bool provided.", argument=argument, value=value
        )
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                number = math.nan
            if math.isfinite(number):
                return int(number)

    raise InvalidArgumentError(
        f"{argument} expected an integer, {type(value).__name__} provided.",
        argument=argument, value=value
    )


class NonceManager:
    """
    Issues and validates named nonces.

    Example:
        nonces = NonceManager("a-long-application-secret", MemoryStorage())
        token = nonces.create("contact-form")
        ...
        if nonces.verify("contact-form", submitted_token):
            process(form)
    """

    def __init__(self, secret: str, storage: StorageEngine,
                 clock: Optional[Clock] = None,
                 expiry: int = DEFAULT_EXPIRY,
                 length: int = DEFAULT_LENGTH,
                 charset: str = DEFAULT_CHARSET,
                 min_secret_length: int = MIN_SECRET_LENGTH):
        """
        Initialize the manager.

        Args:
            secret: Application secret, at least ``min_secret_length`` characters
            storage: Storage backend holding the nonce records
            clock: Time source, wall clock by default
            expiry: Default lifetime in seconds for ``create``
            length: Default token length for ``create``
            charset: Symbols tokens are drawn from
            min_secret_length: Required secret length, never below 12

        Raises:
            ConfigurationError: If the secret is too short
        """
        min_secret_length = max(min_secret_length, MIN_SECRET_LENGTH)
        if not isinstance(secret, str):
            raise ConfigurationError(
                f"Nonce secret must be a string, {type(secret).__name__} provided.",
                field="secret"
            )
        if len(secret) < min_secret_length:
            raise ConfigurationError(
                f"Nonce secret too short ({len(secret)} characters). "
                f"Minimum length is {min_secret_length}.",
                field="secret"
            )

        self.storage = storage
        self.clock = clock or SystemClock()
        self.expiry = expiry
        self.length = length
        self._generator = TokenGenerator(secret, charset, self.clock)

    @classmethod
    def from_config(cls, config: NonceConfig,
                    storage: Optional[StorageEngine] = None,
                    clock: Optional[Clock] = None) -> "NonceManager":
        """Create a manager from configuration, building the backend if none is given."""
        config.validate()
        if storage is None:
            storage = create_storage(config.storage)
        return cls(
            config.secret_key,
            storage,
            clock=clock,
            expiry=config.default_expiry,
            length=config.default_length,
            charset=config.charset,
            min_secret_length=config.min_secret_length,
        )

    @property
    def charset(self) -> str:
        return self._generator.charset

    @charset.setter
    def charset(self, value: str) -> None:
        self._generator.charset = value

    def create(self, name: str, expiry: Optional[Union[Numeric, timedelta]] = None,
               length: Optional[Numeric] = None) -> str:
        """
        Generate a nonce and store it under ``name``.

        Any existing nonce with the same name is replaced.

        Args:
            name: The nonce name
            expiry: Lifetime in seconds (or a timedelta); may be zero or
                negative. Defaults to ``self.expiry``
            length: Token length. Defaults to ``self.length``

        Returns:
            The generated nonce

        Raises:
            InvalidArgumentError: If expiry or length is not an integer
        """
        expiry = _coerce_int(self.expiry if expiry is None else expiry, "expiry")
        length = _coerce_int(self.length if length is None else length, "length")

        try:
            expires_at = self.clock.now() + timedelta(seconds=expiry)
        except (OverflowError, ValueError) as e:
            raise InvalidArgumentError(
                f"expiry of {expiry} seconds is out of range.",
                argument="expiry", value=expiry, cause=e
            )

        value = self._generator.generate(length)

        self.storage.set(name, NonceRecord(value=value, expires_at=expires_at))
        logger.debug(f"Created nonce '{name}' expiring at {expires_at.isoformat()}")

        return value

    def has(self, name: str, allow_expired: bool = False) -> bool:
        """
        Check whether a usable nonce exists for ``name``.

        Args:
            name: The nonce name
            allow_expired: Also report expired nonces

        Returns:
            True if the nonce exists and, unless allowed, has not expired
        """
        if not self.storage.has(name):
            return False

        if allow_expired:
            return True

        record: NonceRecord = self.storage.get(name)
        return not record.is_expired(self.clock.now())

    def get(self, name: str, allow_expired: bool = False) -> Optional[str]:
        """
        Return a stored nonce.

        Args:
            name: The nonce name
            allow_expired: Allow returning expired nonces

        Returns:
            The nonce, or None if it is absent or expired
        """
        if not self.has(name, allow_expired):
            return None

        return self.storage.get(name).value

    def delete(self, name: str) -> None:
        """Delete a stored nonce. Deleting an absent nonce is a no-op."""
        self.storage.delete(name)
        logger.debug(f"Deleted nonce '{name}'")

    def verify(self, name: str, supplied: str, clear: bool = True) -> bool:
        """
        Validate a submitted value against the stored nonce.

        Expired nonces never verify and are left in storage.

        Args:
            name: The nonce name
            supplied: The value submitted by the client
            clear: Delete the nonce once it verifies successfully

        Returns:
            True if the values match
        """
        stored = self.get(name)
        if stored is None:
            logger.debug(f"Nonce '{name}' is absent or expired")
            return False

        if not isinstance(supplied, str):
            return False

        valid = hmac.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))

        if valid and clear:
            self.delete(name)

        logger.debug(f"Verification of nonce '{name}' {'succeeded' if valid else 'failed'}")
        return valid
