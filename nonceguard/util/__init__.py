"""
Utility helpers for nonceguard.
"""

from .config import (
    DEFAULT_ENV_PREFIX,
    load_config_from_env,
    parse_duration_string,
)

__all__ = [
    'DEFAULT_ENV_PREFIX',
    'load_config_from_env',
    'parse_duration_string',
]
