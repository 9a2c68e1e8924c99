from localguide.config import settings
from localguide.services import cache_service as cache_module
from localguide.services.cache_service import CacheService


class FlakyRedis:
    """Redis client whose first ping fails."""

    def __init__(self, store):
        self.store = store
        self.pings = 0

    async def ping(self):
        self.pings += 1
        if self.pings == 1:
            raise ConnectionError("connection refused")
        return True

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value


def patch_redis(monkeypatch, store):
    created = []

    def from_url(url, **kwargs):
        created.append(kwargs)
        client = FlakyRedis(store)
        # Every reconnect shares the ping count so only the very first one fails
        if created[:-1]:
            client.pings = 1
        return client

    monkeypatch.setattr(cache_module.redis, "from_url", from_url)
    return created


async def test_failed_ping_is_retried_on_next_call(monkeypatch):
    cache = CacheService(enabled=True)
    key = cache.availability_key("tour", "t1", "2026-11-02", "2026-11-04")
    created = patch_redis(monkeypatch, {key: "3"})

    assert await cache.get_open_count("tour", "t1", "2026-11-02", "2026-11-04") is None
    assert cache.enabled
    assert await cache.get_open_count("tour", "t1", "2026-11-02", "2026-11-04") == 3
    assert len(created) == 2


async def test_connection_uses_socket_timeouts(monkeypatch):
    created = patch_redis(monkeypatch, {})
    await CacheService(enabled=True).get("anything")

    assert created[0]["socket_timeout"] == settings.redis_socket_timeout_seconds
    assert created[0]["socket_connect_timeout"] == settings.redis_socket_timeout_seconds


async def test_disabled_cache_never_connects(monkeypatch):
    created = patch_redis(monkeypatch, {})
    cache = CacheService(enabled=False)

    assert await cache.get("anything") is None
    assert await cache.set("anything", 1, ttl=10) is False
    assert created == []
