"""
Token generation for nonceguard.
"""

from .generator import DEFAULT_CHARSET, TokenGenerator, rotate_salt

__all__ = [
    "DEFAULT_CHARSET",
    "TokenGenerator",
    "rotate_salt",
]
