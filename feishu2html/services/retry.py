from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from loguru import logger

from feishu2html.services.errors import is_retriable

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    factor: float = 2.0,
    retry_on: Callable[[BaseException], bool] = is_retriable,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """执行 ``operation``，对 ``retry_on`` 接受的异常做指数退避重试。

    ``max_retries`` 包含首次尝试；用尽后抛出最后一次异常。
    """
    if max_retries <= 0:
        raise ValueError("max_retries 必须为正数")
    if factor <= 1.0:
        raise ValueError("factor 必须大于 1")

    delay = initial_delay
    for attempt in range(max_retries):
        try:
            return await operation()
        except Exception as exc:
            if not retry_on(exc):
                raise
            if attempt == max_retries - 1:
                logger.error("重试 {} 次后仍失败: {}", max_retries, exc)
                raise
            logger.warning(
                "第 {}/{} 次尝试失败，{:.2f}s 后重试: {}",
                attempt + 1,
                max_retries,
                delay,
                exc,
            )
            await sleep(delay)
            delay = min(delay * factor, max_delay)
    raise RuntimeError("unreachable")


__all__ = ["with_retry"]
