"""Cache factory"""

from typing import Any

import redis

from rediscache.cache import RedisCache
from rediscache.config import BACKENDS, CacheConfig
from rediscache.serializers import get_serializer
from rediscache.store import StoreClient


def create_client(config: CacheConfig) -> StoreClient:
    """Create a store client for the configured backend

    Args:
        config: Cache configuration

    Returns:
        Store client instance

    Raises:
        ImportError: If the fakeredis backend is requested but not installed
        ValueError: If the backend is not supported
    """
    if config.backend == "redis":
        return redis.Redis.from_url(config.resolve_url(), db=config.redis_db)

    elif config.backend == "fakeredis":
        # Import here to avoid a hard dependency on test tooling
        try:
            import fakeredis
        except ImportError as e:
            msg = "fakeredis not available. Install with test dependencies: pip install -e .[test]"
            raise ImportError(msg) from e

        return fakeredis.FakeRedis()

    else:
        msg = f"Unsupported cache backend: {config.backend}. Supported: {', '.join(BACKENDS)}"
        raise ValueError(msg)


def create_cache(config: CacheConfig, client: Any | None = None) -> RedisCache:
    """Create a cache from configuration

    Args:
        config: Cache configuration
        client: Existing store client to share (built from config if None)

    Returns:
        RedisCache instance
    """
    if client is None:
        client = create_client(config)

    return RedisCache(
        client,
        default_ttl=config.default_ttl,
        prefix=config.key_prefix,
        serializer=get_serializer(config.serializer),
    )


def get_supported_backends() -> list[str]:
    """Get list of supported store backends"""
    return list(BACKENDS)
