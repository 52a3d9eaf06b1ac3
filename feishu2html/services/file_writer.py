from __future__ import annotations

from pathlib import Path


class FileWriter:
    @staticmethod
    def exists(path: Path) -> bool:
        return Path(path).exists()

    @staticmethod
    def create_directories(path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    @staticmethod
    def write_text(path: Path, content: str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @staticmethod
    def write_bytes(path: Path, payload: bytes) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)


__all__ = ["FileWriter"]
