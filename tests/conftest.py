import fakeredis
import pytest
import redis
from hypothesis import Verbosity, settings

from rediscache import RedisCache

# Register test profiles
settings.register_profile("dev", max_examples=10)
settings.register_profile("ci", max_examples=100)
settings.register_profile("debug", max_examples=1000, verbosity=Verbosity.verbose)


class RecordingClient:
    """Store client wrapper that records every call

    Calls to a method listed in ``fail_methods``, or touching a key listed
    in ``fail_keys``, raise ``redis.ConnectionError`` instead of reaching
    the wrapped client.
    """

    def __init__(self, client):
        self._client = client
        self.calls: list[tuple[str, tuple]] = []
        self.fail_methods: set[str] = set()
        self.fail_keys: set[str] = set()

    def _call(self, method, *args, **kwargs):
        self.calls.append((method, args))
        touched = [a for a in args if isinstance(a, str)]
        for a in args:
            if isinstance(a, list):
                touched.extend(a)
        if method in self.fail_methods or self.fail_keys.intersection(touched):
            msg = f"{method} failed"
            raise redis.ConnectionError(msg)
        return getattr(self._client, method)(*args, **kwargs)

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def get(self, name):
        return self._call("get", name)

    def set(self, name, value, ex=None):
        return self._call("set", name, value, ex=ex)

    def unlink(self, *names):
        return self._call("unlink", *names)

    def scan(self, cursor=0, match=None, count=None):
        return self._call("scan", cursor, match, count)

    def mget(self, keys, *args):
        return self._call("mget", keys, *args)

    def exists(self, *names):
        return self._call("exists", *names)


@pytest.fixture
def redis_client():
    """Isolated in-process Redis"""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture
def recorder(redis_client):
    return RecordingClient(redis_client)


@pytest.fixture
def cache(redis_client):
    return RedisCache(redis_client)


@pytest.fixture
def recorded_cache(recorder):
    return RedisCache(recorder)
