from __future__ import annotations

import asyncio
import random
import time
from collections import deque
from typing import Awaitable, Callable, TypeVar

from loguru import logger

from feishu2html.services.errors import RateLimitError

T = TypeVar("T")


class RateLimiter:
    """滑动窗口限流：任意 ``window`` 秒内最多启动 ``max_requests_per_second`` 个请求。

    飞书开放平台对单个应用限制 5 次/秒，超限返回 HTTP 400 + code 99991400，
    该错误以 ``RateLimitError`` 形式抛出时按指数退避重试。
    """

    def __init__(
        self,
        max_requests_per_second: int = 5,
        max_retries: int = 3,
        initial_backoff: float = 1.0,
        max_delay: float = 10.0,
        *,
        window: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        jitter: Callable[[float, float], float] = random.uniform,
    ) -> None:
        if max_requests_per_second <= 0:
            raise ValueError("max_requests_per_second 必须为正数")
        self._max_requests = max_requests_per_second
        self._max_retries = max(0, max_retries)
        self._initial_backoff = initial_backoff
        self._max_delay = max_delay
        self._window = window
        self._clock = clock
        self._sleep = sleep
        self._jitter = jitter
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    @property
    def in_window(self) -> int:
        self._prune(self._clock())
        return len(self._timestamps)

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            await self._acquire_slot()
            try:
                return await operation()
            except RateLimitError as exc:
                if attempt >= self._max_retries:
                    logger.error("限流重试 {} 次后仍失败", self._max_retries)
                    raise
                backoff = self.backoff_delay(attempt)
                logger.warning(
                    "触发飞书接口限流 (code={})，第 {}/{} 次重试，等待 {:.2f}s",
                    exc.code,
                    attempt + 1,
                    self._max_retries,
                    backoff,
                )
                await self._sleep(backoff)
                async with self._lock:
                    self._prune(self._clock())
                attempt += 1

    def backoff_delay(self, attempt: int) -> float:
        delay = self._initial_backoff * (2**attempt) + self._jitter(0.0, 0.5)
        return min(delay, self._max_delay)

    async def _acquire_slot(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                self._prune(now)
                if len(self._timestamps) < self._max_requests:
                    self._timestamps.append(now)
                    return
                wait = self._timestamps[0] + self._window - now
                logger.debug(
                    "请求窗口已满 ({}/{}), 等待 {:.3f}s",
                    len(self._timestamps),
                    self._max_requests,
                    wait,
                )
                await self._sleep(wait)

    def _prune(self, now: float) -> None:
        while self._timestamps and self._timestamps[0] <= now - self._window:
            self._timestamps.popleft()


__all__ = ["RateLimiter"]
