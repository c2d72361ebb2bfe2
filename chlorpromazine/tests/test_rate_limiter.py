import asyncio

import pytest

from chlorpromazine.mcp.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_denies_the_call_after_the_limit(clock):
    limiter = RateLimiter(3, 60.0, clock=clock)

    results = [await limiter.check("alice") for _ in range(4)]

    assert results == [True, True, True, False]


@pytest.mark.asyncio
async def test_window_elapsing_resets_the_count(clock):
    limiter = RateLimiter(2, 60.0, clock=clock)
    assert await limiter.check("alice")
    assert await limiter.check("alice")
    assert not await limiter.check("alice")

    clock.advance(60.0)

    assert await limiter.check("alice")
    assert await limiter.check("alice")
    assert not await limiter.check("alice")


@pytest.mark.asyncio
async def test_callers_are_counted_independently(clock):
    limiter = RateLimiter(1, 60.0, clock=clock)

    assert await limiter.check("alice")
    assert await limiter.check("bob")
    assert not await limiter.check("alice")


@pytest.mark.asyncio
async def test_concurrent_checks_never_exceed_the_limit(clock):
    limiter = RateLimiter(5, 60.0, clock=clock)

    results = await asyncio.gather(*(limiter.check("alice") for _ in range(50)))

    assert results.count(True) == 5


@pytest.mark.asyncio
async def test_reset_clears_one_or_all_callers(clock):
    limiter = RateLimiter(1, 60.0, clock=clock)
    await limiter.check("alice")
    await limiter.check("bob")

    await limiter.reset("alice")
    assert await limiter.check("alice")
    assert not await limiter.check("bob")

    await limiter.reset()
    assert await limiter.check("bob")


@pytest.mark.asyncio
async def test_expired_counters_are_pruned_when_tracking_is_full(clock):
    limiter = RateLimiter(1, 10.0, clock=clock, max_tracked=2)
    await limiter.check("a")
    await limiter.check("b")

    clock.advance(10.0)
    assert await limiter.check("c")

    assert set(limiter._counters) == {"c"}


@pytest.mark.asyncio
async def test_tracking_stays_bounded_while_every_window_is_live(clock):
    limiter = RateLimiter(1, 60.0, clock=clock, max_tracked=10)

    for index in range(1000):
        clock.advance(0.01)
        assert await limiter.check(f"caller-{index}")

    assert len(limiter._counters) == 10
    assert list(limiter._counters) == [f"caller-{index}" for index in range(990, 1000)]


@pytest.mark.asyncio
async def test_renewed_window_moves_caller_to_the_back(clock):
    limiter = RateLimiter(1, 10.0, clock=clock, max_tracked=2)
    await limiter.check("a")
    clock.advance(5.0)
    await limiter.check("b")
    clock.advance(5.0)
    await limiter.check("a")

    clock.advance(1.0)
    await limiter.check("c")

    assert list(limiter._counters) == ["a", "c"]


def test_rejects_nonsensical_limits():
    with pytest.raises(ValueError):
        RateLimiter(0, 60.0)
    with pytest.raises(ValueError):
        RateLimiter(1, 0)
    with pytest.raises(ValueError):
        RateLimiter(1, 60.0, max_tracked=0)
