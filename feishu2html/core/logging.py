from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "feishu2html.log"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {message}"

_LOG_FILE: Path | None = None


def init_logging(
    log_dir: Path | None = None, *, debug: bool = False, quiet: bool = False
) -> Path | None:
    """Initialize Loguru sinks: console always, rotating file when ``log_dir`` is set."""
    global _LOG_FILE
    level = "ERROR" if quiet else ("DEBUG" if debug else "INFO")

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        backtrace=False,
        diagnose=False,
    )

    if log_dir is None:
        _LOG_FILE = None
        return None

    resolved_dir = Path(log_dir)
    resolved_dir.mkdir(parents=True, exist_ok=True)
    log_file = resolved_dir / LOG_FILE_NAME
    logger.add(
        log_file,
        level="DEBUG" if debug else "INFO",
        mode="a",
        encoding="utf-8",
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=debug,
    )
    logger.info("日志系统已初始化，写入路径: {}", log_file)
    _LOG_FILE = log_file
    return log_file


def get_log_file() -> Path | None:
    return _LOG_FILE


__all__ = ["get_log_file", "init_logging"]
