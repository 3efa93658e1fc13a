from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from polygon_rest.infrastructure.resilience.retry import RetryPolicy, retry_async


def test_backoff_is_exponential_and_capped() -> None:
    policy = RetryPolicy(total=5, base=0.5, cap=3.0, jitter=False)
    assert [policy.backoff(n) for n in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]


def test_jitter_stays_within_bounds() -> None:
    policy = RetryPolicy(total=3, base=1.0, cap=4.0, jitter=True)
    for attempt in range(4):
        assert 0.0 <= policy.backoff(attempt) <= min(4.0, 2**attempt)


@dataclass(frozen=True)
class _RecordingPolicy(RetryPolicy):
    delays: list[float] = field(default_factory=list)

    def backoff(self, attempt: int) -> float:
        self.delays.append(super().backoff(attempt))
        return 0.0


@pytest.mark.anyio
async def test_retries_until_success() -> None:
    attempts = 0

    async def flaky() -> str:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise ConnectionError("flaky")
        return "ok"

    policy = _RecordingPolicy(total=3, base=0.1, cap=1.0, jitter=False)
    result = await retry_async(flaky, policy=policy, retry_on=lambda exc: True)

    assert result == "ok"
    assert attempts == 3
    assert policy.delays == [0.1, 0.2]


@pytest.mark.anyio
async def test_non_retryable_error_is_raised_immediately() -> None:
    attempts = 0

    async def broken() -> None:
        nonlocal attempts
        attempts += 1
        raise ValueError("bad input")

    policy = RetryPolicy(total=3, base=0.0, cap=0.0, jitter=False)
    with pytest.raises(ValueError, match="bad input"):
        await retry_async(broken, policy=policy, retry_on=lambda exc: False)
    assert attempts == 1


@pytest.mark.anyio
async def test_last_error_is_raised_when_budget_is_spent() -> None:
    attempts = 0

    async def always_down() -> None:
        nonlocal attempts
        attempts += 1
        raise ConnectionError(f"down #{attempts}")

    policy = RetryPolicy(total=2, base=0.0, cap=0.0, jitter=False)
    with pytest.raises(ConnectionError, match="down #3"):
        await retry_async(always_down, policy=policy, retry_on=lambda exc: True)
