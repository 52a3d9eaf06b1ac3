from __future__ import annotations

INVALID_FILENAME_CHARS = set('<>:"/\\|?*')
RESERVED_NAMES = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *{f"COM{i}" for i in range(1, 10)},
    *{f"LPT{i}" for i in range(1, 10)},
}
MAX_STEM_LENGTH = 120


def sanitize_filename(name: str, *, fallback: str = "untitled", replacement: str = "_") -> str:
    """把文档标题或附件名转成可在各平台落盘的文件名。"""
    cleaned = "".join(
        replacement if (ord(ch) < 32 or ch in INVALID_FILENAME_CHARS) else ch
        for ch in str(name or "")
    )
    cleaned = " ".join(cleaned.split()).strip(" .")
    if not cleaned or set(cleaned) == {replacement}:
        return fallback

    stem, dot, ext = cleaned.rpartition(".")
    if not dot or not stem:
        stem, ext = cleaned, ""
    if len(stem) > MAX_STEM_LENGTH:
        stem = stem[:MAX_STEM_LENGTH].rstrip(" .")
    if stem.upper() in RESERVED_NAMES:
        stem = f"{stem}_"
    return f"{stem}.{ext}" if ext else stem


__all__ = ["sanitize_filename"]
