from __future__ import annotations

from html import escape

from feishu2html.converter.render_context import RenderContext
from feishu2html.converter.renderers.text import render_nested, with_class
from feishu2html.models.block_type import BlockType
from feishu2html.models.enums import TextAlign
from feishu2html.models.node import BlockNode

MAX_HTML_HEADING = 6


class HeadingRenderer:
    """标题 1-6 使用原生标签；7-9 降级为 ``<h6>``，保留 ``heading-hN`` 与 ``data-level``。"""

    def render(self, out: list[str], node: BlockNode, context: RenderContext) -> None:
        data = node.data.payload
        level = BlockType.heading_level(node.data.block_type)
        if data is None or level is None:
            return
        align = TextAlign.css_class(data.style.align if data.style else None)
        classes = with_class("heading", f"heading-h{level}", align)
        tag = f"h{min(level, MAX_HTML_HEADING)}"
        level_attr = f' data-level="{level}"' if level > MAX_HTML_HEADING else ""
        content = context.text_converter.convert(data.elements)
        out.append(
            f'<{tag} id="{escape(node.block_id, quote=True)}" class="{classes}"{level_attr}>'
            f"{content}</{tag}>"
        )
        render_nested(out, node, context)


__all__ = ["HeadingRenderer"]
