"""Store client capability consumed by the cache"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreClient(Protocol):
    """Subset of the redis-py ``Redis`` interface the cache relies on

    ``redis.Redis`` and ``fakeredis.FakeRedis`` satisfy it as-is. Clients
    must return raw bytes (``decode_responses=False``).
    """

    def get(self, name: str) -> bytes | None: ...

    def set(self, name: str, value: bytes, ex: Any = None) -> Any: ...

    def unlink(self, *names: str) -> int: ...

    def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[Any]]: ...

    def mget(self, keys: Any, *args: Any) -> list[bytes | None]: ...

    def exists(self, *names: str) -> int: ...
