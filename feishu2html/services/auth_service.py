from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable

import httpx
from loguru import logger

from feishu2html.services.errors import AuthenticationError, NetworkError

TOKEN_PATH = "/open-apis/auth/v3/tenant_access_token/internal"
EXPIRY_MARGIN_SECONDS = 60


@dataclass
class CachedToken:
    access_token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class AuthService:
    """获取并缓存 tenant_access_token。

    缓存未命中时由 ``asyncio.Lock`` 保证同一时刻只有一个请求在刷新，
    其余并发调用方等待后直接复用刷新结果。本服务不做重试。
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        base_url: str = "https://open.feishu.cn",
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._app_id = self._require_config(app_id, "app_id")
        self._app_secret = self._require_config(app_secret, "app_secret")
        self._token_url = base_url.rstrip("/") + TOKEN_PATH
        self._http_client = http_client
        self._clock = clock
        self._cached: CachedToken | None = None
        self._lock = asyncio.Lock()

    @staticmethod
    def _require_config(value: str, label: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise AuthenticationError(f"{label} 未配置")
        return cleaned

    def get_cached_token(self) -> CachedToken | None:
        return self._cached

    def invalidate(self) -> None:
        self._cached = None

    async def get_access_token(self) -> str:
        seen = self._cached
        if seen is not None and seen.is_valid(self._clock()):
            return seen.access_token
        async with self._lock:
            cached = self._cached
            # 等锁期间已被其他调用方刷新
            if cached is not None and (cached is not seen or cached.is_valid(self._clock())):
                return cached.access_token
            token = await self._request_token()
            self._cached = token
            return token.access_token

    async def _request_token(self) -> CachedToken:
        payload = {"app_id": self._app_id, "app_secret": self._app_secret}
        try:
            response = await self._post(payload)
        except httpx.RequestError as exc:
            raise NetworkError(f"Token 请求失败：{exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            snippet = response.text[:200]
            raise AuthenticationError(
                f"Token 响应不是 JSON（HTTP {response.status_code}）：{snippet}"
            ) from exc

        if not isinstance(data, dict):
            raise AuthenticationError(f"Token 响应格式异常：{data!r}")

        code = data.get("code")
        if isinstance(code, int) and code != 0:
            message = data.get("msg") or data.get("message") or "Token 接口返回错误"
            raise AuthenticationError(f"{message} (code={code})", code)

        access_token = data.get("tenant_access_token")
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationError("Token 响应缺少 tenant_access_token")

        expire = data.get("expire")
        expires_in = int(expire) if isinstance(expire, (int, float)) else 0
        expires_at = self._clock() + expires_in - EXPIRY_MARGIN_SECONDS
        logger.debug("tenant_access_token 已刷新，{}s 后过期", expires_in)
        return CachedToken(access_token=access_token, expires_at=expires_at)

    async def _post(self, payload: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(self._token_url, json=payload)
        async with httpx.AsyncClient(timeout=15.0) as client:
            return await client.post(self._token_url, json=payload)


__all__ = ["AuthService", "CachedToken", "EXPIRY_MARGIN_SECONDS"]
