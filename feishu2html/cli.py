from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from feishu2html.converter.html_builder import TemplateMode
from feishu2html.core.config import ConfigManager, ExportConfig
from feishu2html.core.logging import init_logging
from feishu2html.exporter import ExportProgressCallback, ExportSummary, Feishu2Html
from feishu2html.services.errors import ConfigError


class ConsoleProgress(ExportProgressCallback):
    def on_start(self, document_id: str) -> None:
        logger.info("▶ {}", document_id)

    def on_content_fetched(self, document_id: str, blocks_count: int) -> None:
        logger.info("  已获取 {} 个块", blocks_count)

    def on_asset_downloading(self, document_id: str, current: int, total: int) -> None:
        logger.debug("  素材 {}/{}", current, total)

    def on_complete(self, document_id: str, output_path: Path) -> None:
        logger.info("✔ {} -> {}", document_id, output_path)

    def on_error(self, document_id: str, error: BaseException) -> None:
        logger.error("✘ {}: {}", document_id, error)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="feishu2html",
        description="Export Feishu (Lark) docx documents to standalone HTML files.",
    )
    parser.add_argument("document_ids", nargs="*", help="Document IDs to export.")
    parser.add_argument("--app-id", help="Feishu app id.")
    parser.add_argument("--app-secret", help="Feishu app secret.")
    parser.add_argument("--config", type=Path, help="JSON config file.")
    parser.add_argument("-o", "--output-dir", type=Path, help="Directory for HTML output.")
    parser.add_argument("--image-dir", type=Path, help="Directory for downloaded images.")
    parser.add_argument("--file-dir", type=Path, help="Directory for downloaded attachments.")
    parser.add_argument(
        "--template",
        choices=[mode.value for mode in TemplateMode],
        help="HTML template: full page (default), self-contained page or fragment.",
    )
    parser.add_argument("--custom-css", type=Path, help="CSS file replacing the built-in style.")
    parser.add_argument(
        "--inline-css",
        action="store_true",
        help="Embed CSS in the HTML instead of writing a separate stylesheet.",
    )
    parser.add_argument(
        "--inline-images",
        action="store_true",
        help="Embed images as base64 data URLs.",
    )
    parser.add_argument(
        "--hide-unsupported",
        action="store_true",
        help="Do not render placeholders for unsupported blocks.",
    )
    parser.add_argument("--log-dir", type=Path, help="Also write logs to this directory.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--quiet", action="store_true", help="Only log errors.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ExportConfig:
    base = ConfigManager(args.config).config
    overrides: dict[str, Any] = {}
    if args.document_ids:
        overrides["document_ids"] = args.document_ids
    for key in ("app_id", "app_secret", "output_dir", "image_dir", "file_dir", "log_dir"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    if args.output_dir is not None:
        overrides.setdefault("image_dir", args.output_dir / "images")
        overrides.setdefault("file_dir", args.output_dir / "files")
    if args.template:
        overrides["template_mode"] = args.template
    if args.custom_css is not None:
        try:
            overrides["custom_css"] = args.custom_css.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"无法读取 CSS 文件 {args.custom_css}: {exc}") from exc
    if args.inline_css:
        overrides["external_css"] = False
    if args.inline_images:
        overrides["inline_images"] = True
    if args.hide_unsupported:
        overrides["show_unsupported_blocks"] = False
    if args.debug:
        overrides["debug"] = True
    if args.quiet:
        overrides["quiet"] = True
    try:
        config = ExportConfig.model_validate({**base.model_dump(), **overrides})
    except ValueError as exc:
        raise ConfigError(f"配置无效: {exc}") from exc
    config.require_credentials()
    if not config.document_ids:
        raise ConfigError("未指定要导出的文档 ID")
    return config


async def run(config: ExportConfig) -> ExportSummary:
    async with Feishu2Html(config) as exporter:
        return await exporter.export_batch(progress=ConsoleProgress())


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    init_logging(args.log_dir, debug=args.debug, quiet=args.quiet)
    try:
        config = build_config(args)
    except ConfigError as exc:
        logger.error("{}", exc)
        return 2
    if config.log_dir is not None or config.debug or config.quiet:
        init_logging(config.log_dir, debug=config.debug, quiet=config.quiet)
    summary = asyncio.run(run(config))
    if not summary.ok:
        for document_id, message in summary.failed.items():
            logger.error("导出失败 {}: {}", document_id, message.splitlines()[0] if message else "")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
