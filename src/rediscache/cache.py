"""Redis-backed implementation of the cache contract"""

import logging
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from redis.exceptions import RedisError

from rediscache.exceptions import CacheOperationError
from rediscache.keys import chunked, format_key, scan_pattern
from rediscache.serializers import PickleSerializer, Serializer
from rediscache.store import StoreClient

logger = logging.getLogger(__name__)

# Max keys per SCAN round and per MGET/UNLINK request
LIMIT_BATCH = 512

DEFAULT_TTL = 604800  # 7 days
DEFAULT_PREFIX = "cache"


class RedisCache:
    """Cache adapter over a Redis-like store client

    Every key is namespaced as ``<prefix>:<key>`` so that several caches can
    share one store. Expiry is delegated to the store through SET with EX.

    The client is shared, not owned: the cache never closes it.
    """

    def __init__(
        self,
        client: StoreClient,
        default_ttl: int = DEFAULT_TTL,
        prefix: str = DEFAULT_PREFIX,
        serializer: Serializer | None = None,
    ):
        """Initialize the cache

        Args:
            client: Store client (redis.Redis or compatible)
            default_ttl: TTL in seconds used when set() gets no ttl
            prefix: Namespace prepended to every key
            serializer: Value serializer (defaults to PickleSerializer)
        """
        self._client = client
        self._default_ttl = default_ttl
        self._prefix = prefix
        self._serializer = serializer or PickleSerializer()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    def make_key(self, key: Any) -> str:
        """Return the namespaced store key for a caller key

        Raises:
            InvalidKeyError: If the key cannot be converted to a string
        """
        return format_key(self._prefix, key)

    def get(self, key: Any, default: Any = None) -> Any:
        """Fetch a value from the cache

        Args:
            key: Cache key
            default: Value returned on a cache miss

        Returns:
            The cached value, or default if missing or expired

        Raises:
            InvalidKeyError: If the key cannot be converted to a string
            CacheOperationError: If the store read fails
        """
        cache_key = self.make_key(key)
        try:
            data = self._client.get(cache_key)
        except RedisError as e:
            msg = f"Cannot load cache item under key '{cache_key}'."
            raise CacheOperationError(msg, key=cache_key, cause=e) from e
        return self._result(data, default)

    def set(self, key: Any, value: Any, ttl: int | timedelta | None = None) -> bool:
        """Store a value with an expiration

        Args:
            key: Cache key
            value: Value to store (must be supported by the serializer)
            ttl: Seconds or timedelta until expiry (None = default TTL)

        Returns:
            True if the store acknowledged the write
        """
        return self._write(self.make_key(key), value, ttl)

    def delete(self, key: Any) -> bool:
        """Delete an item; deleting a missing key is not an error"""
        cache_key = self.make_key(key)
        try:
            self._client.unlink(cache_key)
        except RedisError as e:
            msg = f"Cannot delete cache item under key '{cache_key}'."
            raise CacheOperationError(msg, key=cache_key, cause=e) from e
        return True

    def clear(self) -> bool:
        """Remove every entry under this cache's prefix

        Scans the keyspace in rounds of LIMIT_BATCH keys and unlinks exactly
        the keys each round returned. Keys of other prefixes are untouched.
        A store failure mid-sweep leaves the namespace partially cleared.
        """
        pattern = scan_pattern(self._prefix)
        cursor = 0
        removed = 0
        try:
            while True:
                cursor, keys = self._client.scan(
                    cursor=cursor, match=pattern, count=LIMIT_BATCH
                )
                if keys:
                    self._client.unlink(*keys)
                    removed += len(keys)
                if int(cursor) == 0:
                    break
        except RedisError as e:
            msg = f"Cannot clear cache with key pattern '{pattern}'."
            raise CacheOperationError(msg, key=pattern, cause=e) from e

        logger.debug(f"Cleared {removed} keys matching {pattern}")
        return True

    def get_multiple(self, keys: Iterable[Any], default: Any = None) -> dict[Any, Any]:
        """Fetch several items, one MGET per batch of LIMIT_BATCH keys

        All keys are formatted before the first request, so an invalid key
        anywhere fails the call without touching the store.

        Returns:
            Mapping of each original key to its value or default, in
            first-occurrence order
        """
        pairs = self._key_pairs(keys)
        items: dict[Any, Any] = {}
        for batch in chunked(pairs, LIMIT_BATCH):
            cache_keys = [cache_key for _, cache_key in batch]
            try:
                results = self._client.mget(cache_keys)
            except RedisError as e:
                msg = f"Cannot load {len(cache_keys)} cache items."
                raise CacheOperationError(msg, cause=e) from e
            items.update(
                (key, self._result(data, default))
                for (key, _), data in zip(batch, results, strict=True)
            )
        return items

    def set_multiple(
        self,
        values: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several items with a shared TTL

        Keys are validated before any write. Every pair is then attempted
        even after a failure.

        Returns:
            True only if every write succeeded
        """
        pairs = values.items() if isinstance(values, Mapping) else values
        writes = [(self.make_key(key), value) for key, value in pairs]
        result = True
        for cache_key, value in writes:
            try:
                stored = self._write(cache_key, value, ttl)
            except CacheOperationError as e:
                logger.warning(f"Cache set failed for key {e.key}: {e.cause}")
                stored = False
            result = result and stored
        return result

    def delete_multiple(self, keys: Iterable[Any]) -> bool:
        """Delete several items, one UNLINK per batch of LIMIT_BATCH keys

        Raises:
            InvalidKeyError: If any key is invalid; nothing is deleted
            CacheOperationError: On the first failing batch; later batches
                are not attempted
        """
        cache_keys = [cache_key for _, cache_key in self._key_pairs(keys)]
        for batch in chunked(cache_keys, LIMIT_BATCH):
            try:
                self._client.unlink(*batch)
            except RedisError as e:
                msg = "Cannot delete multiple cache items."
                raise CacheOperationError(msg, cause=e) from e
        return True

    def has(self, key: Any) -> bool:
        """Check whether an item is present in the cache"""
        cache_key = self.make_key(key)
        try:
            return self._client.exists(cache_key) == 1
        except RedisError as e:
            msg = f"Cannot check if cache item under key '{cache_key}' exists."
            raise CacheOperationError(msg, key=cache_key, cause=e) from e

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def _ttl_seconds(self, ttl: int | timedelta | None) -> int:
        """Resolve a TTL argument to whole seconds"""
        if ttl is None:
            return self._default_ttl
        if isinstance(ttl, timedelta):
            return int(ttl.total_seconds())
        return ttl

    def _write(self, cache_key: str, value: Any, ttl: int | timedelta | None) -> bool:
        payload = self._serializer.encode(value)
        try:
            return bool(self._client.set(cache_key, payload, ex=self._ttl_seconds(ttl)))
        except RedisError as e:
            msg = f"Cannot save cache item under key '{cache_key}'."
            raise CacheOperationError(msg, key=cache_key, cause=e) from e

    def _key_pairs(self, keys: Iterable[Any]) -> list[tuple[Any, str]]:
        """Pair every caller key with its store key, failing on any invalid key"""
        return [(key, self.make_key(key)) for key in keys]

    def _result(self, data: bytes | None, default: Any) -> Any:
        if not data:
            return default
        return self._serializer.decode(data)
