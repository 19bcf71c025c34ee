import asyncio

from slug_shortener.cache import (
    CacheBackend,
    CacheFactory,
    InMemoryCache,
    NullCache,
)


class TestCacheStrategies:

    def test_memory_cache_round_trip(self):
        cache = InMemoryCache()
        assert asyncio.run(cache.get("slug:abcde")) is None

        assert asyncio.run(cache.set("slug:abcde", "https://a.com")) is True
        assert asyncio.run(cache.get("slug:abcde")) == "https://a.com"

    def test_null_cache_never_hits(self):
        cache = NullCache()
        assert asyncio.run(cache.set("slug:abcde", "https://a.com")) is True
        assert asyncio.run(cache.get("slug:abcde")) is None


class TestCacheFactory:

    def test_creates_memory_cache(self):
        assert isinstance(CacheFactory.create(CacheBackend.MEMORY), InMemoryCache)

    def test_creates_null_cache(self):
        assert isinstance(CacheFactory.create(CacheBackend.NULL), NullCache)

    def test_instances_are_not_shared(self):
        assert CacheFactory.create(CacheBackend.MEMORY) is not CacheFactory.create(CacheBackend.MEMORY)

    def test_unreachable_redis_falls_back_to_memory(self):
        cache = CacheFactory.create(CacheBackend.REDIS, redis_url="redis://127.0.0.1:1/0")
        assert isinstance(cache, InMemoryCache)
