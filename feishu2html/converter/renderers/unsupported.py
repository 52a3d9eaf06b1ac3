from __future__ import annotations

from html import escape

from feishu2html.converter.render_context import RenderContext, render_children
from feishu2html.models.blocks import UnknownBlock
from feishu2html.models.node import BlockNode


def render_placeholder(out: list[str], label: str, context: RenderContext) -> None:
    if context.show_unsupported_blocks:
        out.append(f'<div class="unsupported-block">{escape(label)}</div>')


class PlaceholderRenderer:
    """暂不支持的块：开启 ``show_unsupported_blocks`` 时输出占位提示。

    ``render_children`` 为真时（议程、源同步块等容器）子块照常渲染。
    """

    def __init__(self, name: str, *, partial: bool = False, render_children: bool = False) -> None:
        self.name = name
        self.partial = partial
        self.render_children = render_children

    @property
    def label(self) -> str:
        if self.partial:
            return f"[Partially supported: {self.name} block]"
        return f"[Unsupported block type: {self.name}]"

    def render(self, out: list[str], node: BlockNode, context: RenderContext) -> None:
        render_placeholder(out, self.label, context)
        if self.render_children:
            render_children(out, node, context)


class UnknownRenderer:
    """未知块：携带 ``quote`` 时按引用渲染，否则视开关输出占位。"""

    def render(self, out: list[str], node: BlockNode[UnknownBlock], context: RenderContext) -> None:
        quote = node.data.quote
        if quote is not None and quote.elements:
            content = context.text_converter.convert(quote.elements)
            out.append(f'<blockquote class="quote-block">{content}</blockquote>')
            return
        render_placeholder(out, f"[Unknown block type: {node.data.block_type.name}]", context)


__all__ = ["PlaceholderRenderer", "UnknownRenderer", "render_placeholder"]
