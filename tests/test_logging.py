from pathlib import Path

from loguru import logger

from feishu2html.core.logging import LOG_FILE_NAME, get_log_file, init_logging


def test_init_logging_writes_file(tmp_path: Path) -> None:
    log_file = init_logging(tmp_path / "logs", debug=True)

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    assert get_log_file() == log_file

    logger.debug("调试信息 {}", 42)
    logger.complete()

    content = log_file.read_text(encoding="utf-8")
    assert "调试信息 42" in content
    init_logging()


def test_init_logging_console_only() -> None:
    assert init_logging(quiet=True) is None
    assert get_log_file() is None
    init_logging()
