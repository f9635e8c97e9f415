"""Tests for caching functionality."""

from datetime import date
from fnmatch import fnmatch

import pytest

from taquero.config import settings
from taquero.utils import cache
from taquero.utils.cache import _key_kwargs, cache_key, cached, invalidate_cache


class InMemoryRedis:
    """The handful of redis.asyncio calls the cache helpers make."""

    def __init__(self):
        self.store: dict[str, str] = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def delete(self, *keys):
        for key in keys:
            self.store.pop(key, None)

    async def scan_iter(self, match="*"):
        for key in list(self.store):
            if fnmatch(key, match):
                yield key


@pytest.fixture
def redis_client(monkeypatch) -> InMemoryRedis:
    fake = InMemoryRedis()

    async def get_redis():
        return fake

    monkeypatch.setattr(cache, "get_redis", get_redis)
    monkeypatch.setattr(settings, "cache_enabled", True)
    return fake


@pytest.mark.cache
class TestCacheKeys:
    def test_cache_key_generation(self):
        key1 = cache_key(limit=50, offset=0)
        key2 = cache_key(offset=0, limit=50)
        key3 = cache_key(limit=100, offset=0)

        assert key1 == key2
        assert key1 != key3
        assert cache_key() == "default"

    def test_key_kwargs_skip_sessions_and_users(self):
        kwargs = {
            "months": ["2025-12", "2025-11"],
            "start": date(2025, 11, 1),
            "year": None,
            "db": object(),
            "_user": "Martin",
        }
        assert _key_kwargs(kwargs) == {
            "months": ["2025-11", "2025-12"],
            "start": "2025-11-01",
            "year": None,
        }


@pytest.mark.cache
@pytest.mark.asyncio
class TestCacheDecorator:
    async def test_disabled_always_calls_through(self, monkeypatch):
        monkeypatch.setattr(settings, "cache_enabled", False)
        calls = 0

        @cached(ttl=10, prefix="test")
        async def expensive(year: int):
            nonlocal calls
            calls += 1
            return {"year": year}

        await expensive(year=2025)
        await expensive(year=2025)
        assert calls == 2

    async def test_hit_and_miss(self, redis_client):
        calls = 0

        @cached(ttl=10, prefix="test")
        async def expensive(year: int, _user=None):
            nonlocal calls
            calls += 1
            return {"result": year + 1}

        assert await expensive(year=2025, _user="Martin") == {"result": 2026}
        assert calls == 1

        # Same key even for another caller
        assert await expensive(year=2025, _user="Hugo") == {"result": 2026}
        assert calls == 1

        assert await expensive(year=2024) == {"result": 2025}
        assert calls == 2

    async def test_invalidation(self, redis_client):
        redis_client.store.update({
            "finance:dashboard:abc": "1",
            "finance:dashboard:def": "2",
            "other:func:xyz": "3",
        })

        await invalidate_cache("finance:*")

        assert list(redis_client.store) == ["other:func:xyz"]
