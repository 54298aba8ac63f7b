"""
Configuration module for nonceguard.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..errors import ConfigurationError
from ..store.factory import StorageConfig
from ..token.generator import DEFAULT_CHARSET
from ..util.config import DEFAULT_ENV_PREFIX, load_config_from_env, parse_duration_string


MIN_SECRET_LENGTH = 12
DEFAULT_EXPIRY = 3600
DEFAULT_LENGTH = 16


@dataclass
class NonceConfig:
    """Configuration for a nonce manager"""
    secret_key: str
    default_expiry: int = DEFAULT_EXPIRY
    default_length: int = DEFAULT_LENGTH
    charset: str = DEFAULT_CHARSET
    min_secret_length: int = MIN_SECRET_LENGTH
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX,
                 session: Optional[object] = None) -> "NonceConfig":
        """
        Create configuration from environment variables.

        Recognised keys (after the prefix): SECRET_KEY, DEFAULT_EXPIRY
        (seconds or a duration such as ``15m``), DEFAULT_LENGTH, CHARSET,
        STORAGE_TYPE, REDIS_URL, KEY_PREFIX, SESSION_NAMESPACE.
        """
        env = load_config_from_env(prefix)

        try:
            expiry = int(parse_duration_string(env.get("default_expiry", str(DEFAULT_EXPIRY)))
                         .total_seconds())
            length = int(env.get("default_length", DEFAULT_LENGTH))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting in environment: {e}", cause=e)

        return cls(
            secret_key=env.get("secret_key", ""),
            default_expiry=expiry,
            default_length=length,
            charset=env.get("charset", DEFAULT_CHARSET),
            storage=StorageConfig(
                store_type=env.get("storage_type", "memory"),
                redis_url=env.get("redis_url"),
                key_prefix=env.get("key_prefix"),
                session=session,
                namespace=env.get("session_namespace"),
            ),
        )

    def validate(self) -> bool:
        """Validate the configuration"""
        if self.min_secret_length < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"min_secret_length cannot be lowered below {MIN_SECRET_LENGTH}",
                field="min_secret_length"
            )
        if len(self.secret_key) < self.min_secret_length:
            raise ConfigurationError(
                f"Nonce secret too short ({len(self.secret_key)} characters). "
                f"Minimum length is {self.min_secret_length}.",
                field="secret_key"
            )
        if len(self.charset) < 2:
            raise ConfigurationError("charset needs at least 2 symbols", field="charset")
        if len(set(self.charset)) != len(self.charset):
            raise ConfigurationError("charset contains duplicate symbols", field="charset")
        if self.default_length < 1:
            raise ConfigurationError("default_length must be at least 1", field="default_length")
        return True
