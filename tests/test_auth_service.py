import asyncio

import httpx
import pytest

from feishu2html.services.auth_service import EXPIRY_MARGIN_SECONDS, AuthService
from feishu2html.services.errors import AuthenticationError, NetworkError


class FakeTokenClient:
    def __init__(self, payloads: list[dict], *, delay: float = 0.0) -> None:
        self._payloads = payloads
        self._delay = delay
        self.calls: list[tuple[str, dict]] = []

    async def post(self, url: str, json: dict) -> httpx.Response:
        self.calls.append((url, json))
        if self._delay:
            await asyncio.sleep(self._delay)
        payload = self._payloads.pop(0)
        return httpx.Response(200, json=payload, request=httpx.Request("POST", url))


class FailingTokenClient:
    async def post(self, url: str, json: dict) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=httpx.Request("POST", url))


def _token(value: str = "t-1", expire: int = 7200) -> dict:
    return {"code": 0, "msg": "ok", "tenant_access_token": value, "expire": expire}


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_fetch() -> None:
    client = FakeTokenClient([_token()], delay=0.01)
    service = AuthService("app", "secret", http_client=client)

    tokens = await asyncio.gather(*(service.get_access_token() for _ in range(10)))

    assert tokens == ["t-1"] * 10
    assert len(client.calls) == 1
    url, body = client.calls[0]
    assert url == "https://open.feishu.cn/open-apis/auth/v3/tenant_access_token/internal"
    assert body == {"app_id": "app", "app_secret": "secret"}


@pytest.mark.asyncio
async def test_concurrent_callers_share_short_lived_token() -> None:
    client = FakeTokenClient([_token("short", expire=30)], delay=0.01)
    service = AuthService("app", "secret", http_client=client)

    tokens = await asyncio.gather(*(service.get_access_token() for _ in range(10)))

    assert tokens == ["short"] * 10
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_token_refreshed_after_expiry_margin() -> None:
    now = [1000.0]
    client = FakeTokenClient([_token("t-1", expire=120), _token("t-2")])
    service = AuthService("app", "secret", http_client=client, clock=lambda: now[0])

    assert await service.get_access_token() == "t-1"
    cached = service.get_cached_token()
    assert cached is not None
    assert cached.expires_at == 1000.0 + 120 - EXPIRY_MARGIN_SECONDS

    now[0] = 1059.0
    assert await service.get_access_token() == "t-1"
    now[0] = 1060.0
    assert await service.get_access_token() == "t-2"
    assert len(client.calls) == 2


@pytest.mark.asyncio
async def test_invalidate_forces_refetch() -> None:
    client = FakeTokenClient([_token("t-1"), _token("t-2")])
    service = AuthService("app", "secret", http_client=client)

    assert await service.get_access_token() == "t-1"
    service.invalidate()
    assert await service.get_access_token() == "t-2"


@pytest.mark.asyncio
async def test_error_code_raises_authentication_error() -> None:
    client = FakeTokenClient([{"code": 10003, "msg": "invalid app_secret"}])
    service = AuthService("app", "secret", http_client=client)

    with pytest.raises(AuthenticationError) as exc_info:
        await service.get_access_token()

    assert exc_info.value.code == 10003
    assert "invalid app_secret" in str(exc_info.value)
    assert service.get_cached_token() is None


@pytest.mark.asyncio
async def test_missing_token_raises_authentication_error() -> None:
    client = FakeTokenClient([{"code": 0, "expire": 7200}])
    service = AuthService("app", "secret", http_client=client)

    with pytest.raises(AuthenticationError):
        await service.get_access_token()


@pytest.mark.asyncio
async def test_transport_error_raises_network_error() -> None:
    service = AuthService("app", "secret", http_client=FailingTokenClient())

    with pytest.raises(NetworkError):
        await service.get_access_token()


def test_blank_credentials_rejected() -> None:
    with pytest.raises(AuthenticationError):
        AuthService("", "secret")
    with pytest.raises(AuthenticationError):
        AuthService("app", "   ")
