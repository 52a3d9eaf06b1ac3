from __future__ import annotations

from html import escape

from feishu2html.converter.render_context import RenderContext, render_children
from feishu2html.converter.renderers.text import with_class
from feishu2html.models.blocks import (
    CalloutBlock,
    GridBlock,
    GridColumnBlock,
    QuoteContainerBlock,
    ViewBlock,
)
from feishu2html.models.enums import BlockColor, emoji_for
from feishu2html.models.node import BlockNode


class CalloutRenderer:
    def render(self, out: list[str], node: BlockNode[CalloutBlock], context: RenderContext) -> None:
        data = node.data.callout
        background = BlockColor.class_name(data.background_color if data else None)
        border = BlockColor.class_name(data.border_color if data else None)
        text_color = BlockColor.class_name(data.text_color if data else None)
        classes = with_class(
            "callout-block",
            f"callout-{background or 'default'}",
            f"callout-border-{border}" if border else "",
            f"text-{text_color}" if text_color else "",
        )
        out.append(f'<div class="{classes}">')
        emoji = emoji_for(data.emoji_id if data else None)
        if emoji:
            out.append(
                '<div class="callout-emoji-container">'
                f'<span class="callout-block-emoji">{escape(emoji)}</span></div>'
            )
        out.append('<div class="callout-block-children">')
        if data is not None and data.elements:
            out.append(f"<p>{context.text_converter.convert(data.elements)}</p>")
        render_children(out, node, context)
        out.append("</div></div>")


class GridRenderer:
    def render(self, out: list[str], node: BlockNode[GridBlock], context: RenderContext) -> None:
        ratios = [
            child.data.grid_column.width_ratio
            if child.data.grid_column is not None
            else 1
            for child in node.children
            if isinstance(child.data, GridColumnBlock)
        ]
        if not ratios and node.data.grid is not None:
            ratios = [1] * max(1, node.data.grid.column_size)
        template = " ".join(f"{max(1, ratio)}fr" for ratio in ratios) or "1fr"
        out.append(
            '<div class="grid-layout" '
            f'style="display: grid; grid-template-columns: {template}; gap: 20px;">'
        )
        render_children(out, node, context)
        out.append("</div>")


class GridColumnRenderer:
    def render(
        self, out: list[str], node: BlockNode[GridColumnBlock], context: RenderContext
    ) -> None:
        out.append('<div class="grid-column">')
        render_children(out, node, context)
        out.append("</div>")


class QuoteContainerRenderer:
    def render(
        self, out: list[str], node: BlockNode[QuoteContainerBlock], context: RenderContext
    ) -> None:
        out.append('<blockquote class="quote-container-block">')
        render_children(out, node, context)
        out.append("</blockquote>")


class ViewRenderer:
    """附件以 View 块包裹 File 块出现，View 只作为容器渲染子块。"""

    def render(self, out: list[str], node: BlockNode[ViewBlock], context: RenderContext) -> None:
        out.append('<div class="view-block">')
        render_children(out, node, context)
        out.append("</div>")


__all__ = [
    "CalloutRenderer",
    "GridColumnRenderer",
    "GridRenderer",
    "QuoteContainerRenderer",
    "ViewRenderer",
]
