from __future__ import annotations

import asyncio

import pytest

from polygon_rest.infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitOpenError


async def _fail(breaker: CircuitBreaker) -> None:
    with pytest.raises(RuntimeError, match="boom"):
        async with breaker.guard("polygon"):
            raise RuntimeError("boom")


@pytest.mark.anyio
async def test_success_keeps_breaker_closed() -> None:
    breaker = CircuitBreaker(failure_threshold=2, recovery_timeout_s=1.0)
    async with breaker.guard("polygon"):
        pass
    assert breaker.state == "CLOSED"
    assert breaker._failures == 0


@pytest.mark.anyio
async def test_trips_open_after_threshold_and_fails_fast() -> None:
    breaker = CircuitBreaker(failure_threshold=2, recovery_timeout_s=60.0)

    await _fail(breaker)
    assert breaker.state == "CLOSED"
    await _fail(breaker)
    assert breaker.state == "OPEN"

    called = False
    with pytest.raises(CircuitOpenError, match="circuit_open") as info:
        async with breaker.guard("polygon"):
            called = True
    assert not called
    assert info.value.state == "open"


@pytest.mark.anyio
async def test_success_resets_failure_count() -> None:
    breaker = CircuitBreaker(failure_threshold=2, recovery_timeout_s=60.0)
    await _fail(breaker)
    async with breaker.guard("polygon"):
        pass
    await _fail(breaker)
    assert breaker.state == "CLOSED"


@pytest.mark.anyio
async def test_half_open_probe_success_closes() -> None:
    breaker = CircuitBreaker(failure_threshold=1, recovery_timeout_s=0.05)
    await _fail(breaker)
    assert breaker.state == "OPEN"

    await asyncio.sleep(0.06)
    async with breaker.guard("polygon"):
        assert breaker.state == "HALF_OPEN"
    assert breaker.state == "CLOSED"


@pytest.mark.anyio
async def test_half_open_probe_failure_reopens() -> None:
    breaker = CircuitBreaker(failure_threshold=3, recovery_timeout_s=0.05)
    for _ in range(3):
        await _fail(breaker)
    await asyncio.sleep(0.06)

    await _fail(breaker)
    assert breaker.state == "OPEN"


@pytest.mark.anyio
async def test_half_open_call_limit() -> None:
    breaker = CircuitBreaker(failure_threshold=1, recovery_timeout_s=0.05, half_open_max_calls=1)
    await _fail(breaker)
    await asyncio.sleep(0.06)

    async def probe() -> BaseException | None:
        try:
            async with breaker.guard("polygon"):
                await asyncio.sleep(0.05)
        except CircuitOpenError as exc:
            return exc
        return None

    results = await asyncio.gather(probe(), probe())

    rejected = [r for r in results if r is not None]
    assert len(rejected) == 1
    assert str(rejected[0]) == "circuit_half_open"
    assert breaker.state == "CLOSED"
