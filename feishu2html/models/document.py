from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel

from feishu2html.models.blocks import Block


class DocumentMeta(BaseModel):
    document_id: str
    revision_id: int | None = None
    title: str = ""


@dataclass
class DocumentRawContent:
    document: DocumentMeta
    blocks: dict[str, Block] = field(default_factory=dict)


__all__ = ["DocumentMeta", "DocumentRawContent"]
