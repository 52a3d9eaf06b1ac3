from __future__ import annotations

import base64
from pathlib import Path

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
}


def mime_type_for(path: Path) -> str:
    return _MIME_TYPES.get(Path(path).suffix.lower(), "image/png")


def encode_image(path: Path) -> str:
    """读取图片并返回 ``data:`` URL，用于把图片内联进 HTML。"""
    path = Path(path)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type_for(path)};base64,{payload}"


__all__ = ["encode_image", "mime_type_for"]
