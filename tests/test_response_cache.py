"""Tests for the read-through cache: TTL, fallback and single-flight."""

import asyncio

import pytest

from nfl_hq.cache.response_cache import ResponseCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingCompute:
    def __init__(self, values=None, fail=False):
        self.values = list(values or ["v1", "v2", "v3"])
        self.fail = fail
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        index = self.calls - 1
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("upstream down")
        return self.values[index]


@pytest.fixture
def clock():
    return FakeClock()


class TestResponseCache:
    def test_hit_within_ttl_does_not_recompute(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        compute = CountingCompute()

        first = asyncio.run(cache.read_through(compute))
        clock.now += 59
        second = asyncio.run(cache.read_through(compute))

        assert first == second == "v1"
        assert compute.calls == 1

    def test_expired_entry_is_recomputed(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        compute = CountingCompute()

        asyncio.run(cache.read_through(compute))
        clock.now += 60
        assert asyncio.run(cache.read_through(compute)) == "v2"
        assert compute.calls == 2

    def test_failure_with_nothing_cached_propagates(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        with pytest.raises(RuntimeError):
            asyncio.run(cache.read_through(CountingCompute(fail=True)))
        assert cache.last_known() is None

    def test_failure_falls_back_to_last_known_value(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        asyncio.run(cache.read_through(CountingCompute()))
        clock.now += 10_000

        result = asyncio.run(
            cache.read_through(
                CountingCompute(fail=True), on_fallback=lambda v: f"stale:{v}"
            )
        )
        assert result == "stale:v1"
        # The stored value and its timestamp are left untouched
        assert cache.last_known() == "v1"
        assert cache.get_fresh() is None

    def test_store_replaces_unconditionally(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.store("a")
        clock.now += 30
        cache.store("b")
        assert cache.get_fresh() == "b"
        assert cache.age() == 0

    def test_concurrent_misses_each_recompute_by_default(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock, single_flight=False)
        compute = CountingCompute()

        async def run():
            return await asyncio.gather(*(cache.read_through(compute) for _ in range(3)))

        results = asyncio.run(run())
        assert compute.calls == 3
        assert sorted(results) == ["v1", "v2", "v3"]

    def test_single_flight_shares_one_computation(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock, single_flight=True)
        compute = CountingCompute()

        async def run():
            return await asyncio.gather(*(cache.read_through(compute) for _ in range(3)))

        results = asyncio.run(run())
        assert compute.calls == 1
        assert results == ["v1", "v1", "v1"]

    def test_single_flight_failure_falls_back(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock, single_flight=True)
        cache.store("old")
        clock.now += 120

        async def run():
            failing = CountingCompute(fail=True)
            results = await asyncio.gather(*(cache.read_through(failing) for _ in range(2)))
            return results, failing.calls

        results, calls = asyncio.run(run())
        assert results == ["old", "old"]
        assert calls == 1
