from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from loguru import logger

from feishu2html.models.blocks import Block, parse_block
from feishu2html.models.document import DocumentMeta, DocumentRawContent
from feishu2html.services.auth_service import AuthService
from feishu2html.services.errors import (
    RATE_LIMIT_CODE,
    ApiError,
    AuthenticationError,
    DocumentNotFoundError,
    NetworkError,
    RateLimitError,
    describe_failure,
    error_for_code,
    is_retriable,
)
from feishu2html.services.file_writer import FileWriter
from feishu2html.services.rate_limiter import RateLimiter
from feishu2html.services.retry import with_retry

T = TypeVar("T")

DEFAULT_BASE_URL = "https://open.feishu.cn"
BLOCKS_PAGE_SIZE = 500


class FeishuApiClient:
    """docx 接口客户端：文档信息、分页拉取块、下载素材与导出画板。

    每个请求都经过限流器，整体再由 ``with_retry`` 对网络错误、限流和 5xx 重试；
    token 获取也在重试范围内。
    """

    def __init__(
        self,
        app_id: str = "",
        app_secret: str = "",
        *,
        base_url: str = DEFAULT_BASE_URL,
        auth_service: AuthService | None = None,
        rate_limiter: RateLimiter | None = None,
        file_writer: FileWriter | None = None,
        http_client: httpx.AsyncClient | None = None,
        requests_per_second: int = 5,
        max_retries: int = 3,
        retry_initial_delay: float = 1.0,
        retry_max_delay: float = 10.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=30.0)
        self._auth_service = auth_service or AuthService(
            app_id, app_secret, base_url=self._base_url, http_client=self._client
        )
        self._rate_limiter = rate_limiter or RateLimiter(
            max_requests_per_second=requests_per_second,
            max_retries=max_retries,
            sleep=sleep,
        )
        self._file_writer = file_writer or FileWriter()
        self._max_retries = max_retries
        self._retry_initial_delay = retry_initial_delay
        self._retry_max_delay = retry_max_delay
        self._sleep = sleep
        self._closed = False

    async def __aenter__(self) -> FeishuApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    async def get_document_meta(self, document_id: str) -> DocumentMeta:
        operation = "获取文档信息失败"
        path = f"/open-apis/docx/v1/documents/{document_id}"

        async def _fetch() -> dict[str, Any]:
            return await self._get_json(path, operation=operation, document_id=document_id)

        payload = await self._call(_fetch)
        document = (payload.get("data") or {}).get("document")
        if not isinstance(document, dict):
            raise ApiError(
                describe_failure(operation, None, "响应缺少 data.document", document_id)
            )
        meta = DocumentMeta.model_validate(document)
        logger.info("文档信息: {} (revision={})", meta.title, meta.revision_id)
        return meta

    async def get_document_blocks(
        self, document_id: str, meta: DocumentMeta | None = None
    ) -> DocumentRawContent:
        if meta is None:
            meta = await self.get_document_meta(document_id)
        operation = "获取文档块失败"
        path = f"/open-apis/docx/v1/documents/{document_id}/blocks"
        blocks: dict[str, Block] = {}
        page_token: str | None = None
        seen_tokens: set[str] = set()
        page = 0

        while True:
            params: dict[str, Any] = {"page_size": BLOCKS_PAGE_SIZE}
            if page_token:
                params["page_token"] = page_token

            async def _fetch(params: dict[str, Any] = params) -> dict[str, Any]:
                return await self._get_json(
                    path, params=params, operation=operation, document_id=document_id
                )

            payload = await self._call(_fetch)
            page += 1
            data = payload.get("data") or {}
            items = data.get("items") or []
            for item in items:
                if not isinstance(item, dict) or "block_id" not in item:
                    logger.debug("跳过缺少 block_id 的块: {}", item)
                    continue
                block = parse_block(item)
                blocks[block.block_id] = block
            logger.debug("第 {} 页: {} 个块", page, len(items))

            has_more = bool(data.get("has_more"))
            page_token = data.get("page_token") or None
            if not has_more:
                break
            if page_token is None:
                logger.warning("has_more=true 但未返回 page_token，停止分页: {}", document_id)
                break
            if page_token in seen_tokens:
                logger.warning("page_token 重复出现 ({})，停止分页: {}", page_token, document_id)
                break
            seen_tokens.add(page_token)

        logger.info("文档 {} 共 {} 个块，{} 页", document_id, len(blocks), page)
        return DocumentRawContent(document=meta, blocks=blocks)

    async def download_asset(self, token: str, dest_path: Path) -> Path:
        path = f"/open-apis/drive/v1/medias/{token}/download"
        return await self._download(path, None, token, Path(dest_path), "下载素材失败")

    async def export_board_as_image(self, token: str, dest_path: Path) -> Path:
        path = f"/open-apis/board/v1/whiteboards/{token}/download_as_image"
        return await self._download(
            path, {"file_type": "png"}, token, Path(dest_path), "导出画板失败"
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def _download(
        self,
        path: str,
        params: dict[str, Any] | None,
        token: str,
        dest_path: Path,
        operation: str,
    ) -> Path:
        async def _fetch() -> bytes:
            response = await self._send("GET", path, params=params)
            if response.status_code == 400:
                # 该接口 400 时响应体不一定带业务码，统一视为限流
                raise RateLimitError(f"{operation}: {token} 返回 HTTP 400")
            if response.status_code >= 400:
                self._decode(response, operation=operation)
            return response.content

        content = await self._call(_fetch)
        self._file_writer.write_bytes(dest_path, content)
        logger.debug("已保存 {} -> {} ({} bytes)", token, dest_path, len(content))
        return dest_path

    async def _call(self, operation: Callable[[], Awaitable[T]]) -> T:
        async def _limited() -> T:
            return await self._rate_limiter.execute(operation)

        return await with_retry(
            _limited,
            max_retries=self._max_retries,
            initial_delay=self._retry_initial_delay,
            max_delay=self._retry_max_delay,
            retry_on=is_retriable,
            sleep=self._sleep,
        )

    async def _get_json(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        operation: str,
        document_id: str | None = None,
    ) -> dict[str, Any]:
        response = await self._send("GET", path, params=params)
        return self._decode(response, operation=operation, document_id=document_id)

    async def _send(
        self, method: str, path: str, *, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        token = await self._auth_service.get_access_token()
        headers = {"Authorization": f"Bearer {token}"}
        try:
            return await self._client.request(
                method, f"{self._base_url}{path}", params=params, headers=headers
            )
        except httpx.RequestError as exc:
            raise NetworkError(f"请求 {path} 失败：{exc}") from exc

    def _decode(
        self,
        response: httpx.Response,
        *,
        operation: str,
        document_id: str | None = None,
    ) -> dict[str, Any]:
        status = response.status_code
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            hint = f"，Retry-After={retry_after}" if retry_after else ""
            raise RateLimitError(f"{operation}: HTTP 429{hint}")
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if status == 400 and isinstance(payload, dict):
            if payload.get("code") == RATE_LIMIT_CODE:
                raise RateLimitError(f"{operation}: {payload.get('msg') or '请求频率超限'}")

        if not isinstance(payload, dict):
            if status == 404:
                raise DocumentNotFoundError(
                    describe_failure(operation, status, "资源不存在", document_id), status
                )
            snippet = response.text[:200]
            raise ApiError(
                describe_failure(operation, status, f"响应不是 JSON：{snippet}", document_id),
                status,
            )

        code = payload.get("code")
        message = str(payload.get("msg") or payload.get("message") or "")
        if isinstance(code, int) and code != 0:
            error = error_for_code(operation, code, message, document_id)
            if isinstance(error, AuthenticationError):
                self._auth_service.invalidate()
            raise error
        if status == 404:
            raise DocumentNotFoundError(
                describe_failure(operation, status, message or "资源不存在", document_id), status
            )
        if status >= 400:
            raise ApiError(describe_failure(operation, status, message, document_id), status)
        return payload


__all__ = ["BLOCKS_PAGE_SIZE", "DEFAULT_BASE_URL", "FeishuApiClient"]
