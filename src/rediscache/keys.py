"""Cache key formatting utilities"""

import uuid
from collections.abc import Iterator, Sequence
from typing import Any, TypeVar

from rediscache.exceptions import InvalidKeyError

T = TypeVar("T")

# Caller key types that have a well-defined string form
KEY_TYPES: tuple[type, ...] = (str, int, uuid.UUID)

_GLOB_SPECIAL = "\\*?[]"


def key_to_str(key: Any) -> str:
    """Render a caller key as text

    Args:
        key: Caller-supplied key (str, int or UUID)

    Returns:
        String form of the key

    Raises:
        InvalidKeyError: If the key type has no defined string form
    """
    if isinstance(key, str):
        return key

    try:
        if isinstance(key, bool) or not isinstance(key, KEY_TYPES):
            msg = f"unsupported key type '{type(key).__name__}'"
            raise TypeError(msg)
        return str(key)
    except TypeError as e:
        msg = f"Invalid cache key typed as '{type(key).__name__}', cannot be converted to string."
        raise InvalidKeyError(msg, key_type=type(key), cause=e) from e


def format_key(prefix: str, key: Any) -> str:
    """Build the namespaced store key ``<prefix>:<key>``"""
    return f"{prefix}:{key_to_str(key)}"


def escape_pattern(text: str) -> str:
    """Escape glob metacharacters so SCAN matches ``text`` literally"""
    return "".join(f"\\{c}" if c in _GLOB_SPECIAL else c for c in text)


def scan_pattern(prefix: str) -> str:
    """Build the SCAN pattern matching every key under ``prefix``"""
    return f"{escape_pattern(prefix)}:*"


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Split a sequence into ordered batches of at most ``size`` items"""
    if size < 1:
        msg = "Batch size must be positive"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield items[start : start + size]
