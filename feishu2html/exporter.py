from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable

from loguru import logger

from feishu2html.converter.html_builder import HtmlBuilder, TemplateMode
from feishu2html.converter.render_context import attachment_file_name, image_file_name
from feishu2html.converter.tree_builder import build_tree
from feishu2html.core.config import ExportConfig
from feishu2html.models.blocks import BoardBlock, FileBlock, ImageBlock
from feishu2html.models.node import BlockNode
from feishu2html.services.errors import FeishuApiError
from feishu2html.services.feishu_client import FeishuApiClient
from feishu2html.services.file_writer import FileWriter
from feishu2html.services.image_encoder import encode_image
from feishu2html.services.path_sanitizer import sanitize_filename


class ExportProgressCallback:
    """导出进度回调，按需覆盖任意方法。"""

    def on_start(self, document_id: str) -> None:
        pass

    def on_metadata_fetched(self, document_id: str, title: str) -> None:
        pass

    def on_content_fetched(self, document_id: str, blocks_count: int) -> None:
        pass

    def on_asset_downloading(self, document_id: str, current: int, total: int) -> None:
        pass

    def on_complete(self, document_id: str, output_path: Path) -> None:
        pass

    def on_error(self, document_id: str, error: BaseException) -> None:
        pass


@dataclass
class AssetStats:
    images: int = 0
    files: int = 0
    boards: int = 0
    skipped: int = 0
    failed: int = 0


@dataclass
class ExportSummary:
    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class _AssetJob:
    kind: str
    token: str
    target: Path
    inline: bool


class Feishu2Html:
    """单个或批量导出飞书文档为 HTML。"""

    def __init__(
        self,
        config: ExportConfig,
        *,
        api_client: FeishuApiClient | None = None,
        file_writer: FileWriter | None = None,
    ) -> None:
        self._config = config
        self._file_writer = file_writer or FileWriter()
        if api_client is None:
            config.require_credentials()
            api_client = FeishuApiClient(
                config.app_id,
                config.app_secret,
                base_url=config.base_url,
                file_writer=self._file_writer,
                requests_per_second=config.requests_per_second,
                max_retries=config.max_retries,
            )
        self._api_client = api_client
        self._semaphore = asyncio.Semaphore(config.max_concurrent_downloads)

    async def __aenter__(self) -> Feishu2Html:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._api_client.close()

    async def export(
        self,
        document_id: str,
        output_file_name: str | None = None,
        progress: ExportProgressCallback | None = None,
    ) -> Path:
        progress = progress or ExportProgressCallback()
        progress.on_start(document_id)
        logger.info("开始导出文档: {}", document_id)
        try:
            meta = await self._api_client.get_document_meta(document_id)
            progress.on_metadata_fetched(document_id, meta.title)
            content = await self._api_client.get_document_blocks(document_id, meta)
            progress.on_content_fetched(document_id, len(content.blocks))

            forest = build_tree(content.blocks)
            image_cache: dict[str, str] = {}
            stats = await self.download_assets(document_id, forest, image_cache, progress)
            logger.info(
                "素材处理完成: 图片 {}，附件 {}，画板 {}，跳过 {}，失败 {}",
                stats.images,
                stats.files,
                stats.boards,
                stats.skipped,
                stats.failed,
            )

            builder = HtmlBuilder(
                meta.title or document_id,
                template_mode=self._config.template_mode,
                custom_css=self._config.custom_css,
                external_css=self._config.external_css,
                css_file_name=self._config.css_file_name,
                show_unsupported_blocks=self._config.show_unsupported_blocks,
                image_path=self._config.image_path,
                file_path=self._config.file_path,
                image_cache=image_cache,
            )
            html = builder.build(forest)

            output_dir = Path(self._config.output_dir)
            self._file_writer.create_directories(output_dir)
            if self._config.external_css and builder.template_mode is TemplateMode.DEFAULT:
                css_path = output_dir / self._config.css_file_name
                self._file_writer.write_text(css_path, builder.css)
                logger.debug("CSS 已写入: {}", css_path)

            file_name = output_file_name or f"{sanitize_filename(meta.title, fallback=document_id)}.html"
            html_path = output_dir / file_name
            self._file_writer.write_text(html_path, html)
        except Exception as exc:
            logger.error("导出文档 {} 失败: {}", document_id, exc)
            progress.on_error(document_id, exc)
            raise

        logger.info("导出完成: {}", html_path)
        progress.on_complete(document_id, html_path)
        return html_path

    async def export_batch(
        self,
        document_ids: list[str] | None = None,
        progress: ExportProgressCallback | None = None,
    ) -> ExportSummary:
        ids = list(document_ids if document_ids is not None else self._config.document_ids)
        summary = ExportSummary()
        logger.info("批量导出 {} 个文档", len(ids))
        for index, document_id in enumerate(ids, start=1):
            logger.info("处理第 {}/{} 个文档: {}", index, len(ids), document_id)
            try:
                await self.export(document_id, progress=progress)
            except Exception as exc:
                summary.failed[document_id] = str(exc)
                continue
            summary.succeeded.append(document_id)
        logger.info(
            "批量导出结束: 成功 {}，失败 {}，共 {}",
            len(summary.succeeded),
            len(summary.failed),
            summary.total,
        )
        return summary

    async def download_assets(
        self,
        document_id: str,
        forest: list[BlockNode],
        image_cache: dict[str, str],
        progress: ExportProgressCallback | None = None,
    ) -> AssetStats:
        progress = progress or ExportProgressCallback()
        jobs = self._collect_jobs(forest)
        stats = AssetStats()
        if not jobs:
            return stats

        total = len(jobs)
        done = 0

        async def _run(job: _AssetJob) -> None:
            nonlocal done
            async with self._semaphore:
                await self._download_one(job, image_cache, stats)
            done += 1
            progress.on_asset_downloading(document_id, done, total)

        await asyncio.gather(*(_run(job) for job in jobs))
        return stats

    def _collect_jobs(self, forest: list[BlockNode]) -> list[_AssetJob]:
        image_dir = Path(self._config.image_dir)
        file_dir = Path(self._config.file_dir)
        inline = self._config.inline_images
        jobs: dict[Path, _AssetJob] = {}
        for root in forest:
            for node in root.walk():
                block = node.data
                if isinstance(block, ImageBlock) and block.image and block.image.token:
                    token = block.image.token
                    target = image_dir / image_file_name(token)
                    jobs.setdefault(target, _AssetJob("image", token, target, inline))
                elif isinstance(block, BoardBlock) and block.board and block.board.token:
                    token = block.board.token
                    target = image_dir / image_file_name(token)
                    jobs.setdefault(target, _AssetJob("board", token, target, inline))
                elif isinstance(block, FileBlock) and block.file and block.file.token:
                    token = block.file.token
                    target = file_dir / attachment_file_name(token, block.file.name)
                    jobs.setdefault(target, _AssetJob("file", token, target, False))
        return list(jobs.values())

    async def _download_one(
        self, job: _AssetJob, image_cache: dict[str, str], stats: AssetStats
    ) -> None:
        download: Callable[[str, Path], Awaitable[Path]]
        if job.kind == "board":
            download = self._api_client.export_board_as_image
        else:
            download = self._api_client.download_asset
        try:
            if self._file_writer.exists(job.target):
                logger.debug("素材已存在，跳过下载: {}", job.target)
                stats.skipped += 1
            else:
                await download(job.token, job.target)
                if job.kind == "image":
                    stats.images += 1
                elif job.kind == "board":
                    stats.boards += 1
                else:
                    stats.files += 1
            if job.inline:
                image_cache[job.token] = encode_image(job.target)
        except (FeishuApiError, OSError) as exc:
            stats.failed += 1
            logger.error("素材 {} ({}) 处理失败: {}", job.token, job.kind, exc)


__all__ = ["AssetStats", "ExportProgressCallback", "ExportSummary", "Feishu2Html"]
