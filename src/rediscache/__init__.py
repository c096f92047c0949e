"""Namespaced Redis cache adapter"""

from rediscache.cache import LIMIT_BATCH, RedisCache
from rediscache.exceptions import (
    CacheError,
    CacheOperationError,
    ErrorKind,
    InvalidKeyError,
)
from rediscache.factory import create_cache
from rediscache.serializers import (
    JsonSerializer,
    PickleSerializer,
    Serializer,
    get_serializer,
)
from rediscache.store import StoreClient

__all__ = [
    "LIMIT_BATCH",
    "CacheError",
    "CacheOperationError",
    "ErrorKind",
    "InvalidKeyError",
    "JsonSerializer",
    "PickleSerializer",
    "RedisCache",
    "Serializer",
    "StoreClient",
    "create_cache",
    "get_serializer",
]
