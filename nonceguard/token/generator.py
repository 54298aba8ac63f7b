"""
Token generation for nonceguard.

Values are drawn from a fixed alphabet. Every position mixes a
cryptographically random draw with one character of a salt obtained by
rotating the secret key by ``now (seconds) mod len(secret)``, so the
bias changes from second to second without making the output depend
on the secret alone.
"""

import logging
import secrets
from typing import Optional

from ..core.types import Clock, SystemClock
from ..errors import ConfigurationError, InvalidArgumentError


logger = logging.getLogger(__name__)

DEFAULT_CHARSET = "1234567890abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def rotate_salt(secret: str, offset: int) -> str:
    """Cyclically shift ``secret`` left by ``offset`` characters."""
    if not secret:
        return secret
    offset %= len(secret)
    return secret[offset:] + secret[:offset]


class TokenGenerator:
    """Produces random strings biased by a rotating secret-derived salt."""

    def __init__(self, secret: str, charset: str = DEFAULT_CHARSET,
                 clock: Optional[Clock] = None):
        if not secret:
            raise ConfigurationError("Generator secret must not be empty", field="secret")

        self._secret = secret
        self.charset = charset
        self.clock = clock or SystemClock()

    @property
    def charset(self) -> str:
        return self._charset

    @charset.setter
    def charset(self, value: str) -> None:
        if len(value) < 2:
            raise ConfigurationError(
                f"Charset needs at least 2 symbols, got {len(value)}", field="charset"
            )
        # Repeated symbols would be drawn more often than the rest.
        if len(set(value)) != len(value):
            raise ConfigurationError("Charset contains duplicate symbols", field="charset")
        self._charset = value

    def current_salt(self) -> str:
        """Get the salt for the current second."""
        rotate = int(self.clock.now().timestamp()) % len(self._secret)
        return rotate_salt(self._secret, rotate)

    def generate(self, length: int) -> str:
        """
        Generate a token.

        Args:
            length: Exact number of characters to emit, at least 1

        Returns:
            Token string of exactly ``length`` characters from the charset

        Raises:
            InvalidArgumentError: If length is not a positive integer
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise InvalidArgumentError(
                f"length must be a positive integer, got {length!r}",
                argument="length", value=length
            )

        salt = self.current_salt()
        salt_len = len(salt)
        char_len = len(self.charset)

        chars = []
        while len(chars) < length:
            position = len(chars)
            # A multiple of char_len keeps the reduction below unbiased.
            idx = secrets.randbelow(char_len * salt_len)
            idx += ord(salt[position % salt_len])
            chars.append(self.charset[idx % char_len])

        return "".join(chars)
