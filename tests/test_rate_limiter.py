import pytest

from feishu2html.services.errors import (
    ApiError,
    DocumentNotFoundError,
    NetworkError,
    RateLimitError,
    is_retriable,
)
from feishu2html.services.rate_limiter import RateLimiter
from feishu2html.services.retry import with_retry


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _limiter(clock: FakeClock, **kwargs) -> RateLimiter:
    return RateLimiter(
        clock=clock,
        sleep=clock.sleep,
        jitter=lambda low, high: 0.0,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_rate_limiter_waits_when_window_full() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests_per_second=2)
    calls: list[float] = []

    async def op() -> str:
        calls.append(clock.now)
        return "ok"

    for _ in range(3):
        assert await limiter.execute(op) == "ok"

    assert calls == [0.0, 0.0, 1.0]
    assert clock.sleeps == [1.0]


@pytest.mark.asyncio
async def test_rate_limiter_window_prunes_expired_entries() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests_per_second=2)

    async def op() -> None:
        return None

    await limiter.execute(op)
    await limiter.execute(op)
    assert limiter.in_window == 2

    clock.now = 1.5
    assert limiter.in_window == 0
    await limiter.execute(op)
    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_rate_limiter_retries_rate_limit_error() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests_per_second=100, max_retries=3)
    attempts = 0

    async def op() -> str:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise RateLimitError()
        return "done"

    assert await limiter.execute(op) == "done"
    assert attempts == 3
    assert clock.sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_rate_limiter_gives_up_after_max_retries() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests_per_second=100, max_retries=2)
    attempts = 0

    async def op() -> None:
        nonlocal attempts
        attempts += 1
        raise RateLimitError()

    with pytest.raises(RateLimitError):
        await limiter.execute(op)
    assert attempts == 3


@pytest.mark.asyncio
async def test_rate_limiter_propagates_other_errors() -> None:
    clock = FakeClock()
    limiter = _limiter(clock)
    attempts = 0

    async def op() -> None:
        nonlocal attempts
        attempts += 1
        raise DocumentNotFoundError("missing", 404)

    with pytest.raises(DocumentNotFoundError):
        await limiter.execute(op)
    assert attempts == 1
    assert clock.sleeps == []


def test_backoff_delay_is_capped() -> None:
    limiter = RateLimiter(initial_backoff=1.0, max_delay=10.0, jitter=lambda low, high: high)

    assert limiter.backoff_delay(0) == 1.5
    assert limiter.backoff_delay(2) == 4.5
    assert limiter.backoff_delay(10) == 10.0


def test_rate_limiter_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError):
        RateLimiter(max_requests_per_second=0)


def test_is_retriable() -> None:
    assert is_retriable(NetworkError("boom"))
    assert is_retriable(RateLimitError())
    assert is_retriable(ApiError("server", 503))
    assert not is_retriable(ApiError("bad", 400))
    assert not is_retriable(DocumentNotFoundError("missing", 404))
    assert not is_retriable(ValueError("x"))


@pytest.mark.asyncio
async def test_with_retry_backs_off_exponentially() -> None:
    sleeps: list[float] = []
    attempts = 0

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    async def op() -> str:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise NetworkError("flaky")
        return "ok"

    result = await with_retry(op, max_retries=3, initial_delay=1.0, sleep=fake_sleep)

    assert result == "ok"
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_with_retry_raises_last_error() -> None:
    async def fake_sleep(seconds: float) -> None:
        return None

    async def op() -> None:
        raise ApiError("server", 502)

    with pytest.raises(ApiError):
        await with_retry(op, max_retries=2, sleep=fake_sleep)


@pytest.mark.asyncio
async def test_with_retry_does_not_retry_client_errors() -> None:
    attempts = 0

    async def op() -> None:
        nonlocal attempts
        attempts += 1
        raise DocumentNotFoundError("missing", 404)

    with pytest.raises(DocumentNotFoundError):
        await with_retry(op, max_retries=5)
    assert attempts == 1


@pytest.mark.asyncio
async def test_with_retry_validates_arguments() -> None:
    async def op() -> None:
        return None

    with pytest.raises(ValueError):
        await with_retry(op, max_retries=0)
    with pytest.raises(ValueError):
        await with_retry(op, factor=1.0)
