from __future__ import annotations

from html import escape

from feishu2html.converter.render_context import RenderContext
from feishu2html.models.blocks import BoardBlock, DiagramBlock, FileBlock, ImageBlock
from feishu2html.models.enums import TextAlign
from feishu2html.models.node import BlockNode


def _size_style(width: int | None, height: int | None) -> str:
    parts = []
    if width:
        parts.append(f"max-width: {width}px")
    if height:
        parts.append(f"max-height: {height}px")
    return f' style="{"; ".join(parts)}"' if parts else ""


class ImageRenderer:
    def render(self, out: list[str], node: BlockNode[ImageBlock], context: RenderContext) -> None:
        data = node.data.image
        if data is None or not data.token:
            return
        align = TextAlign.css_class(data.align)
        classes = f' class="{align}"' if align else ""
        src = escape(context.image_src(data.token), quote=True)
        out.append(
            f'<div class="image-block"><img src="{src}" alt="image"{classes}'
            f"{_size_style(data.width, data.height)}></div>"
        )


class BoardRenderer:
    def render(self, out: list[str], node: BlockNode[BoardBlock], context: RenderContext) -> None:
        data = node.data.board
        if data is None or not data.token:
            return
        src = escape(context.image_src(data.token), quote=True)
        out.append(
            '<div class="board-container">'
            f'<img src="{src}" alt="Electronic Whiteboard" style="display: block; margin: 0 auto;">'
            "</div>"
        )


class FileRenderer:
    def render(self, out: list[str], node: BlockNode[FileBlock], context: RenderContext) -> None:
        data = node.data.file
        if data is None or not data.token:
            return
        href = escape(context.file_href(data.token, data.name), quote=True)
        name = escape(data.name or "Download File")
        out.append(
            f'<div class="file-block"><a href="{href}" download>'
            f'<span class="file-icon">📎</span>{name}</a></div>'
        )


class DiagramRenderer:
    def render(self, out: list[str], node: BlockNode[DiagramBlock], context: RenderContext) -> None:
        data = node.data.diagram
        if data is None or not data.content:
            return
        diagram_type = "" if data.diagram_type is None else str(data.diagram_type)
        out.append(
            f'<div class="diagram" data-type="{diagram_type}"><pre>{escape(data.content)}</pre></div>'
        )


__all__ = ["BoardRenderer", "DiagramRenderer", "FileRenderer", "ImageRenderer"]
