import asyncio
import gc

import pytest

from app.utils.cache import CACHE_TTL_SECONDS, TTLCache


def test_default_ttl_is_thirty_minutes():
    assert CACHE_TTL_SECONDS == 1800
    assert TTLCache().ttl == 1800


def test_cache_ttl(cache, clock):
    """Test that items expire after their TTL"""
    cache.set("short_lived", "value")
    assert cache.get("short_lived") == "value"

    clock.advance(CACHE_TTL_SECONDS - 1)
    assert cache.get("short_lived") == "value"

    clock.advance(1)
    assert cache.get("short_lived") is None
    assert len(cache) == 0


def test_cache_is_unbounded_by_default(cache):
    for i in range(2000):
        cache.set(f"key{i}", i)
    assert len(cache) == 2000
    assert cache.get("key0") == 0


def test_cache_lru_eviction(clock):
    """Test that the cache enforces max_entries and evicts least recently used items"""
    cache = TTLCache(max_entries=3, clock=clock)

    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    # Access "a" to make it recently used. Order is now: b, c, a
    cache.get("a")

    # Add new item, triggering eviction of LRU item ("b")
    cache.set("d", 4)

    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert cache.get("d") == 4


def test_cache_explicit_delete(cache):
    cache.set("key", "value")
    cache.delete("key")
    assert cache.get("key") is None
    # Deleting a missing key is a no-op
    cache.delete("key")


def test_cache_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    cache.clear()
    assert cache.get("a") is None
    assert cache.get("b") is None


class TestGetOrCompute:

    def test_producer_runs_once_within_ttl(self, cache):
        calls = []

        async def producer():
            calls.append(1)
            return ["a", "b"]

        async def scenario():
            first = await cache.get_or_compute("k", producer)
            second = await cache.get_or_compute("k", producer)
            return first, second

        first, second = asyncio.run(scenario())
        assert first == second == ["a", "b"]
        assert len(calls) == 1

    def test_producer_runs_again_after_expiry(self, cache, clock):
        calls = []

        async def producer():
            calls.append(1)
            return len(calls)

        assert asyncio.run(cache.get_or_compute("k", producer)) == 1
        clock.advance(CACHE_TTL_SECONDS)
        assert asyncio.run(cache.get_or_compute("k", producer)) == 2
        assert asyncio.run(cache.get_or_compute("k", producer)) == 2
        assert len(calls) == 2

    def test_failure_is_not_cached(self, cache):
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("upstream down")
            return "ok"

        with pytest.raises(RuntimeError):
            asyncio.run(cache.get_or_compute("k", flaky))
        assert cache.get("k") is None

        assert asyncio.run(cache.get_or_compute("k", flaky)) == "ok"
        assert len(attempts) == 2

    def test_concurrent_misses_share_one_computation(self, cache):
        calls = []

        async def slow():
            calls.append(1)
            await asyncio.sleep(0.01)
            return "value"

        async def scenario():
            return await asyncio.gather(*(cache.get_or_compute("k", slow) for _ in range(5)))

        assert asyncio.run(scenario()) == ["value"] * 5
        assert len(calls) == 1

    def test_concurrent_waiters_all_see_failure(self, cache):
        async def broken():
            await asyncio.sleep(0.01)
            raise ValueError("boom")

        async def scenario():
            return await asyncio.gather(
                cache.get_or_compute("k", broken),
                cache.get_or_compute("k", broken),
                return_exceptions=True,
            )

        results = asyncio.run(scenario())
        assert all(isinstance(r, ValueError) for r in results)
        assert cache.get("k") is None

    def test_failure_after_waiters_cancelled_is_retrieved(self, cache):
        async def broken():
            await asyncio.sleep(0.02)
            raise ValueError("boom")

        async def scenario():
            loop = asyncio.get_running_loop()
            errors = []
            loop.set_exception_handler(lambda _, context: errors.append(context))

            waiter = asyncio.ensure_future(cache.get_or_compute("k", broken))
            await asyncio.sleep(0)
            waiter.cancel()
            await asyncio.sleep(0.05)
            gc.collect()
            await asyncio.sleep(0)
            return waiter, errors

        waiter, errors = asyncio.run(scenario())
        assert waiter.cancelled()
        assert errors == []
        assert cache.get("k") is None

    def test_keys_are_independent(self, cache):
        async def scenario():
            a = await cache.get_or_compute("a", _const("A"))
            b = await cache.get_or_compute("b", _const("B"))
            return a, b

        assert asyncio.run(scenario()) == ("A", "B")


def _const(value):
    async def producer():
        return value
    return producer
